import pdfplumber
from pathlib import Path
from typing import Tuple

from studyhub.config import settings

TEXT_EXTENSIONS = [".txt", ".md"]


class DocumentLoader:
    """
    Extract raw text from uploaded study material.
    Supports PDF (via pdfplumber) and plain text files.
    """

    @staticmethod
    def extract_pdf_text(file_path: str) -> str:
        """Concatenate the text of every PDF page"""
        pages = []
        with pdfplumber.open(file_path) as pdf:
            for page in pdf.pages:
                pages.append(page.extract_text() or "")
        return "\n".join(pages)

    @staticmethod
    def extract_plain_text(file_path: str) -> str:
        return Path(file_path).read_text(encoding="utf-8")

    @staticmethod
    def load(file_path: str) -> Tuple[str, str]:
        """
        Read a file and return (title, text).

        The title is the file name without its extension.

        Raises:
            FileNotFoundError: if the file does not exist
            ValueError: if the file is too large, of an unsupported type,
                or contains no text
        """
        path = Path(file_path)
        if not path.is_file():
            raise FileNotFoundError(f"File not found: {file_path}")

        size = path.stat().st_size
        if size > settings.max_upload_bytes:
            raise ValueError(f"File is too large ({size} bytes, limit {settings.max_upload_bytes})")

        file_ext = path.suffix.lower()
        if file_ext == ".pdf":
            text = DocumentLoader.extract_pdf_text(str(path))
        elif file_ext in TEXT_EXTENSIONS:
            text = DocumentLoader.extract_plain_text(str(path))
        else:
            raise ValueError(f"Unsupported file format: {file_ext}. Use .pdf, .txt or .md")

        if not text.strip():
            raise ValueError(f"No text could be extracted from {path.name}")

        return path.stem, text
