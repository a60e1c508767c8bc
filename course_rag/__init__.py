"""
Course materials RAG core.

Shared configuration and logging for the chunking, extraction and
retrieval packages. Import ``course_rag.settings`` directly for the
composed pipeline settings.
"""

__version__ = "1.0.0"

from .logging_config import get_logger, setup_logging

__all__ = ["__version__", "get_logger", "setup_logging"]
