"""FastAPI endpoints for the Premios de la Quincena API.

This module defines the routes for analyzing statements (JSON, CSV or PDF), extracting transactions
from PDF text, reading a session's award history, and health checks. It wires together the ingestion
services, the extraction agent and the statement analyzer.
"""

from collections.abc import Sequence

from fastapi import APIRouter, Depends, HTTPException, UploadFile

from quincena.agents.base import BaseAgent
from quincena.api.dependencies import get_agent, get_analyzer, get_repository, get_session_id
from quincena.core.db import SummaryRepository
from quincena.core.models import (
    AnalysisReport,
    ExtractedTransactions,
    HistoryResponse,
    PdfTextPayload,
    Transaction,
    TransactionsPayload,
)
from quincena.core.utils import get_logger
from quincena.engine.streaks import find_current_streaks
from quincena.services.analyzer import EmptyStatementError, StatementAnalyzer
from quincena.services.csv_parser import parse_csv
from quincena.services.pdf_text import extract_pdf_text

router = APIRouter()
logger = get_logger("premios-quincena.api")

ANALYSIS_RESPONSES = {
    422: {
        "description": "No transactions found in the statement.",
        "content": {
            "application/json": {
                "example": {"detail": "No se encontraron transacciones. Verifica el formato del archivo."}
            }
        },
    },
}


def _analyze(analyzer: StatementAnalyzer, session_id: str, transactions: Sequence[Transaction]) -> AnalysisReport:
    try:
        return analyzer.analyze(session_id, transactions)
    except EmptyStatementError as exc:
        raise HTTPException(422, str(exc)) from exc


def _extract_with_agent(agent: BaseAgent, text: str) -> list[Transaction]:
    try:
        return agent.extract_transactions(text)
    except ValueError as exc:
        raise HTTPException(400, str(exc)) from exc
    except RuntimeError as exc:
        raise HTTPException(502, "Statement extraction service failed") from exc


@router.post(
    "/analyze",
    response_model=AnalysisReport,
    summary="Analyze already-parsed transactions",
    description=(
        "Categorize a statement's transactions, compute its awards and streaks, and store the month's summary "
        "for the caller's session (`session_id` cookie, issued when missing)."
    ),
    responses=ANALYSIS_RESPONSES,
)
def analyze(
    payload: TransactionsPayload,
    session_id: str = Depends(get_session_id),
    analyzer: StatementAnalyzer = Depends(get_analyzer),
) -> AnalysisReport:
    """Analyze a JSON list of transactions."""
    logger.info(f"Received {len(payload.transactions)} transactions: session={session_id}")
    return _analyze(analyzer, session_id, payload.transactions)


@router.post(
    "/analyze/csv",
    response_model=AnalysisReport,
    summary="Upload a bank statement CSV and get its awards",
    description=(
        "Upload a CSV statement (generic `fecha/concepto/monto` layout or BBVA `cargo/abono` layout).\n\n"
        "- 400 Bad Request: If the file is not a CSV.\n"
        "- 422 Unprocessable Entity: If no transactions could be read."
    ),
    responses={400: {"description": "Only CSV files accepted."}, **ANALYSIS_RESPONSES},
)
def analyze_csv(
    file: UploadFile,
    session_id: str = Depends(get_session_id),
    analyzer: StatementAnalyzer = Depends(get_analyzer),
) -> AnalysisReport:
    """Parse an uploaded CSV statement and analyze it."""
    logger.info(f"Received CSV upload: filename={file.filename}, session={session_id}")
    if not (file.filename or "").lower().endswith(".csv"):
        logger.warning(f"Rejected file (not CSV): {file.filename}")
        raise HTTPException(400, "Only CSV files accepted")
    text = file.file.read().decode("utf-8-sig", errors="replace")
    return _analyze(analyzer, session_id, parse_csv(text))


@router.post(
    "/analyze/pdf",
    response_model=AnalysisReport,
    summary="Upload a bank statement PDF and get its awards",
    description=(
        "Upload a text-based PDF statement. Its text is extracted and sent to the LLM extraction agent.\n\n"
        "- 400 Bad Request: If the file is not a PDF or cannot be read.\n"
        "- 422 Unprocessable Entity: If no transactions could be read (e.g. scanned PDFs).\n"
        "- 502 Bad Gateway: If the extraction service failed."
    ),
    responses={400: {"description": "Only PDF files accepted."}, **ANALYSIS_RESPONSES},
)
def analyze_pdf(
    file: UploadFile,
    session_id: str = Depends(get_session_id),
    analyzer: StatementAnalyzer = Depends(get_analyzer),
    agent: BaseAgent = Depends(get_agent),
) -> AnalysisReport:
    """Extract transactions from an uploaded PDF statement and analyze them."""
    logger.info(f"Received PDF upload: filename={file.filename}, session={session_id}")
    if not (file.filename or "").lower().endswith(".pdf"):
        logger.warning(f"Rejected file (not PDF): {file.filename}")
        raise HTTPException(400, "Only PDF files accepted")
    try:
        text = extract_pdf_text(file.file.read())
    except ValueError as exc:
        raise HTTPException(400, str(exc)) from exc
    transactions = _extract_with_agent(agent, text) if text else []
    return _analyze(analyzer, session_id, transactions)


@router.post(
    "/parse-pdf",
    response_model=ExtractedTransactions,
    summary="Extract transactions from PDF statement text",
    description=(
        "Send the text of a PDF statement (extracted client-side) and get back its transactions.\n\n"
        "- 400 Bad Request: If no text was provided or the LLM answer had no JSON array.\n"
        "- 502 Bad Gateway: If the extraction service failed."
    ),
    responses={
        200: {
            "description": "Extracted transactions.",
            "content": {
                "application/json": {
                    "example": {"transactions": [{"date": "2025-06-02", "amount": -150.0, "description": "OXXO"}]}
                }
            },
        },
        400: {
            "description": "No text provided.",
            "content": {"application/json": {"example": {"detail": "No text provided"}}},
        },
    },
)
def parse_pdf(payload: PdfTextPayload, agent: BaseAgent = Depends(get_agent)) -> ExtractedTransactions:
    """Extract transactions from statement text with the LLM agent."""
    if not payload.text.strip():
        raise HTTPException(400, "No text provided")
    return ExtractedTransactions(transactions=_extract_with_agent(agent, payload.text))


@router.get(
    "/history",
    response_model=HistoryResponse,
    summary="Get the session's monthly summaries and current streaks",
)
def history(
    session_id: str = Depends(get_session_id),
    repository: SummaryRepository = Depends(get_repository),
) -> HistoryResponse:
    """Return stored monthly summaries for the caller's session."""
    summaries = repository.get_history(session_id)
    return HistoryResponse(session_id=session_id, history=summaries, streaks=find_current_streaks(summaries))


@router.get(
    "/health",
    summary="Health check",
    description="Simple health check endpoint. Returns status ok.",
    response_description="Status ok.",
    responses={200: {"description": "API is healthy.", "content": {"application/json": {"example": {"status": "ok"}}}}},
)
async def health() -> dict:
    """Health check endpoint."""
    return {"status": "ok"}
