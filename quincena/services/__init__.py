"""Services package: statement ingestion, monthly summaries, share text and analysis orchestration."""
