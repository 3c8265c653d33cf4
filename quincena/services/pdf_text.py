"""Text extraction from PDF bank statements with pdfplumber."""

import io

import pdfplumber
from pdfminer.psparser import PSException
from pdfplumber.utils.exceptions import PdfminerException

from quincena.core.utils import get_logger

logger = get_logger("premios-quincena.pdf")

# Words whose baselines differ by at most this many points share a line.
LINE_TOLERANCE = 3

UNREADABLE_PDF_MESSAGE = "No se pudo leer el PDF"


def extract_pdf_text(data: bytes) -> str:
    """Return the statement text, one visual line per line, top to bottom.

    Returns an empty string for scanned (image only) PDFs. Raises ``ValueError``
    when the bytes are not a readable PDF.
    """
    lines: list[str] = []
    try:
        with pdfplumber.open(io.BytesIO(data)) as pdf:
            for page in pdf.pages:
                text = page.extract_text(x_tolerance=LINE_TOLERANCE, y_tolerance=LINE_TOLERANCE) or ""
                lines.extend(line.strip() for line in text.splitlines() if line.strip())
            logger.info(f"Extracted {len(lines)} lines from {len(pdf.pages)} PDF page(s)")
    except (PdfminerException, PSException) as exc:
        logger.exception("Failed to read PDF statement")
        raise ValueError(UNREADABLE_PDF_MESSAGE) from exc

    if not lines:
        logger.warning("No text found in PDF, it may be a scanned image.")
    return "\n".join(lines)
