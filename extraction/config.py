from dataclasses import dataclass

from course_rag.env import env_int, env_str


@dataclass(frozen=True)
class OcrConfig:
    language: str = "eng"
    max_pdf_pages: int = 10
    dpi: int = 200
    oem: int = 3
    psm: int = 3
    tesseract_cmd: str = ""

    @classmethod
    def from_env(cls) -> "OcrConfig":
        return cls(
            language=env_str("OCR_LANGUAGE", cls.language),
            max_pdf_pages=env_int("OCR_MAX_PDF_PAGES", cls.max_pdf_pages),
            dpi=env_int("OCR_DPI", cls.dpi),
            oem=env_int("OCR_OEM", cls.oem),
            psm=env_int("OCR_PSM", cls.psm),
            tesseract_cmd=env_str("TESSERACT_CMD", cls.tesseract_cmd),
        )
