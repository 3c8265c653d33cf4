"""API integration tests for Premios de la Quincena."""

import pytest
from fastapi.testclient import TestClient

from conftest import FakeAgent

HTTP_200_OK = 200
HTTP_400_BAD_REQUEST = 400
HTTP_422_UNPROCESSABLE = 422

JUNE_STATEMENT = {
    "transactions": [
        {"date": "2025-06-02", "amount": -150.0, "description": "OXXO TIENDA 123"},
        {"date": "2025-06-03", "amount": -90.0, "description": "OXXO CENTRO"},
        {"date": "2025-06-05", "amount": -250.0, "description": "UBER TRIP"},
    ]
}

MAY_STATEMENT = {
    "transactions": [
        {"date": "2025-05-06", "amount": -60.0, "description": "OXXO REFORMA"},
        {"date": "2025-05-07", "amount": -45.0, "description": "7 ELEVEN"},
    ]
}


def _expect_status(response: object, expected: int) -> None:
    if response.status_code != expected:
        msg = f"Expected status {expected}, got {response.status_code}: {response.text}"
        raise AssertionError(msg)


def test_health(client: TestClient) -> None:
    """Test the /health endpoint returns status ok."""
    response = client.get("/health")
    _expect_status(response, HTTP_200_OK)
    if response.json() != {"status": "ok"}:
        msg = f"Expected response {{'status': 'ok'}}, got {response.json()}"
        raise AssertionError(msg)


def test_scalar_docs(client: TestClient) -> None:
    """Test the /scalar endpoint returns OpenAPI docs."""
    response = client.get("/scalar")
    _expect_status(response, HTTP_200_OK)
    if "openapi" not in response.text:
        msg = "Expected 'openapi' in response text"
        raise AssertionError(msg)


def test_analyze_json_issues_session_and_ranks_awards(client: TestClient) -> None:
    """Analyzing a statement sets the session cookie and returns ranked awards."""
    response = client.post("/analyze", json=JUNE_STATEMENT)
    _expect_status(response, HTTP_200_OK)
    if "session_id" not in response.cookies:
        msg = "Expected a session_id cookie to be issued"
        raise AssertionError(msg)
    body = response.json()
    if [a["id"] for a in body["awards"]] != ["accionista_uber", "indice_godin"]:
        msg = f"Unexpected awards: {body['awards']}"
        raise AssertionError(msg)
    if body["month"] != "2025-06" or body["summary"]["total_spent"] != 490.0:
        msg = f"Unexpected summary: {body['summary']}"
        raise AssertionError(msg)
    if [t["category"] for t in body["transactions"]] != ["convenience_store", "convenience_store", "rideshare"]:
        msg = f"Unexpected categories: {body['transactions']}"
        raise AssertionError(msg)
    if body["session_id"] != response.cookies["session_id"] or body["streaks"]:
        msg = f"Unexpected session or streaks: {body['session_id']}, {body['streaks']}"
        raise AssertionError(msg)


def test_analyze_keeps_existing_session(client: TestClient) -> None:
    """A caller that already has a session keeps it."""
    client.cookies.set("session_id", "sesion-existente")
    response = client.post("/analyze", json=JUNE_STATEMENT)
    _expect_status(response, HTTP_200_OK)
    if response.json()["session_id"] != "sesion-existente":
        msg = f"Expected the existing session id, got {response.json()['session_id']}"
        raise AssertionError(msg)


def test_analyze_empty_statement(client: TestClient) -> None:
    """An empty statement is rejected with the user-facing message."""
    response = client.post("/analyze", json={"transactions": []})
    _expect_status(response, HTTP_422_UNPROCESSABLE)
    if "No se encontraron transacciones" not in response.json()["detail"]:
        msg = f"Unexpected detail: {response.json()}"
        raise AssertionError(msg)


def test_analyze_csv_upload(client: TestClient) -> None:
    """A BBVA-style CSV is parsed and analyzed."""
    csv_content = (
        "Fecha,Concepto,Cargo,Abono\n"
        "02/06/2025,OXXO TIENDA,150.00,\n"
        "03/06/2025,OXXO CENTRO,90.00,\n"
        "15/06/2025,SPEI NOMINA,,12000.00\n"
    )
    response = client.post("/analyze/csv", files={"file": ("estado.csv", csv_content, "text/csv")})
    _expect_status(response, HTTP_200_OK)
    body = response.json()
    if [t["amount"] for t in body["transactions"]] != [-150.0, -90.0, 12000.0]:
        msg = f"Unexpected amounts: {body['transactions']}"
        raise AssertionError(msg)
    if "indice_godin" not in [a["id"] for a in body["awards"]]:
        msg = f"Expected indice_godin, got {body['awards']}"
        raise AssertionError(msg)


def test_analyze_csv_rejects_other_files(client: TestClient) -> None:
    """Uploading a non-CSV file returns 400."""
    response = client.post("/analyze/csv", files={"file": ("estado.txt", "hola", "text/plain")})
    _expect_status(response, HTTP_400_BAD_REQUEST)


def test_analyze_csv_without_rows(client: TestClient) -> None:
    """A CSV with only a header has no transactions."""
    response = client.post("/analyze/csv", files={"file": ("estado.csv", "Fecha,Concepto,Monto\n", "text/csv")})
    _expect_status(response, HTTP_422_UNPROCESSABLE)


def test_parse_pdf_text(client: TestClient, fake_agent: FakeAgent) -> None:
    """Statement text is handed to the extraction agent and its transactions returned."""
    response = client.post("/parse-pdf", json={"text": "02/06 OXXO TIENDA 150.00"})
    _expect_status(response, HTTP_200_OK)
    transactions = response.json()["transactions"]
    if [t["description"] for t in transactions] != ["OXXO TIENDA", "OXXO CENTRO"]:
        msg = f"Unexpected transactions: {transactions}"
        raise AssertionError(msg)
    if fake_agent.received != ["02/06 OXXO TIENDA 150.00"]:
        msg = f"Agent got unexpected text: {fake_agent.received}"
        raise AssertionError(msg)


def test_parse_pdf_requires_text(client: TestClient, fake_agent: FakeAgent) -> None:
    """Blank text is rejected without calling the agent."""
    response = client.post("/parse-pdf", json={"text": "  "})
    _expect_status(response, HTTP_400_BAD_REQUEST)
    if fake_agent.received:
        msg = "Agent should not be called for blank text"
        raise AssertionError(msg)


def test_analyze_pdf_rejects_other_files(client: TestClient) -> None:
    """Uploading a non-PDF file returns 400."""
    response = client.post("/analyze/pdf", files={"file": ("estado.csv", b"a,b", "text/csv")})
    _expect_status(response, HTTP_400_BAD_REQUEST)


def test_history_reports_streaks(client: TestClient) -> None:
    """Two consecutive months with the same award show up as a streak."""
    client.cookies.set("session_id", "racha")
    _expect_status(client.post("/analyze", json=MAY_STATEMENT), HTTP_200_OK)
    second = client.post("/analyze", json=JUNE_STATEMENT)
    _expect_status(second, HTTP_200_OK)
    if second.json()["streaks"] != [{"award_id": "indice_godin", "count": 2}]:
        msg = f"Unexpected streaks in analysis: {second.json()['streaks']}"
        raise AssertionError(msg)

    response = client.get("/history")
    _expect_status(response, HTTP_200_OK)
    body = response.json()
    if [s["month"] for s in body["history"]] != ["2025-05", "2025-06"]:
        msg = f"Unexpected history: {body['history']}"
        raise AssertionError(msg)
    if body["streaks"] != [{"award_id": "indice_godin", "count": 2}]:
        msg = f"Unexpected streaks: {body['streaks']}"
        raise AssertionError(msg)
    if "Índice Godín x2 meses seguidos" not in second.json()["share_text"]:
        msg = f"Streak missing from share text: {second.json()['share_text']}"
        raise AssertionError(msg)


def test_analyze_pdf_upload(client: TestClient, fake_agent: FakeAgent, monkeypatch: pytest.MonkeyPatch) -> None:
    """A PDF upload is turned into text, sent to the agent and analyzed."""
    monkeypatch.setattr("quincena.api.routes.extract_pdf_text", lambda _data: "02/06 OXXO TIENDA 150.00")
    response = client.post("/analyze/pdf", files={"file": ("estado.pdf", b"%PDF-1.4", "application/pdf")})
    _expect_status(response, HTTP_200_OK)
    if fake_agent.received != ["02/06 OXXO TIENDA 150.00"]:
        msg = f"Agent got unexpected text: {fake_agent.received}"
        raise AssertionError(msg)
    if [a["id"] for a in response.json()["awards"]] != ["indice_godin"]:
        msg = f"Unexpected awards: {response.json()['awards']}"
        raise AssertionError(msg)


def test_analyze_scanned_pdf(client: TestClient, fake_agent: FakeAgent, monkeypatch: pytest.MonkeyPatch) -> None:
    """A PDF without text yields no transactions and never reaches the agent."""
    monkeypatch.setattr("quincena.api.routes.extract_pdf_text", lambda _data: "")
    response = client.post("/analyze/pdf", files={"file": ("estado.pdf", b"%PDF-1.4", "application/pdf")})
    _expect_status(response, HTTP_422_UNPROCESSABLE)
    if fake_agent.received:
        msg = "Agent should not be called for an empty PDF"
        raise AssertionError(msg)


def test_analyze_pdf_corrupt_file(client: TestClient, fake_agent: FakeAgent) -> None:
    """A .pdf upload that is not a readable PDF is a 400, not a server error."""
    response = client.post("/analyze/pdf", files={"file": ("estado.pdf", b"not a pdf at all", "application/pdf")})
    _expect_status(response, HTTP_400_BAD_REQUEST)
    if response.json()["detail"] != "No se pudo leer el PDF" or fake_agent.received:
        msg = f"Unexpected response: {response.json()}, agent calls: {fake_agent.received}"
        raise AssertionError(msg)
