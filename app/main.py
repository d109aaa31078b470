import argparse
from pathlib import Path

from app.config.settings import Settings
from app.database.connection import close_pool, init_pool
from app.database.repositories.document_repository import PostgresDocumentRepository
from app.documents.models import CompanyCategory
from app.logging.logger import Log
from app.processor.service import build_service


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Validate credit application documents.")
    parser.add_argument("files", nargs="+", type=Path, help="documents to upload")
    parser.add_argument(
        "--category",
        choices=[category.value for category in CompanyCategory],
        help="company category",
    )
    parser.add_argument("--max-debt-amount", type=float, help="maximum debt in UYU")
    parser.add_argument("--max-debt-term", type=int, help="maximum debt term in years")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    """Entry point: load settings -> build service -> upload each file."""
    args = _parse_args(argv)
    settings = Settings()
    Log.configure(settings.log_level)

    uses_postgres = settings.storage_backend.lower() == "postgres"
    if uses_postgres:
        init_pool(settings)
        PostgresDocumentRepository().ensure_schema()

    try:
        service = build_service(settings)
        service.set_context(
            company_category=args.category,
            max_debt_amount=args.max_debt_amount,
            max_debt_term_years=args.max_debt_term,
        )
        for path in args.files:
            outcome = service.upload(path.read_bytes(), path.name)
            status = "accepted" if outcome.accepted else "rejected"
            message = outcome.document.validation_message or ""
            print(f"{path.name}: {outcome.document.document_type.value} {status} {message}")
        for progress in service.completion_status():
            print(f"{progress.document_type.value}: {progress.status.value}")
    finally:
        if uses_postgres:
            close_pool()


if __name__ == "__main__":
    main()
