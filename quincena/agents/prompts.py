"""Prompts for StatementAgent: extraction of transactions from statement text."""

SYSTEM_PROMPT = """
You extract transactions from Mexican bank statements.
You will be given the raw text of a statement, one visual line per line.
Return ONLY a JSON array, with no explanations, thoughts, commentary, or extra text.
Each item must be an object with exactly these fields:
  - date (string, YYYY-MM-DD)
  - amount (number, negative for expenses/charges, positive for deposits)
  - description (string, merchant name only, no reference codes)

Rules:
- Skip balances, totals, interest summaries and headers: only real movements.
- Keep the statement order.
- Output must be valid JSON, no trailing commas.

Example output:
[
  {"date": "2025-06-02", "amount": -150.0, "description": "OXXO TIENDA"},
  {"date": "2025-06-15", "amount": 12000.0, "description": "SPEI NOMINA"}
]
"""

USER_PROMPT_TEMPLATE = (
    "Extract all transactions from this bank statement. Return a JSON array only, no explanation. "
    "Each item must have: date (YYYY-MM-DD), amount (number, negative for expenses), "
    "description (merchant name only, no reference codes). Statement text: {text}"
)

USER_PROMPT_LOG_LABEL = "Extract statement transactions (JSON ARRAY: date, amount, description)"
