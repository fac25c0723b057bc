"""Command-line interface for BizBooks."""

import argparse
import asyncio
import sys
from pathlib import Path
from uuid import uuid4

from bizbooks import __version__
from bizbooks.config import get_settings
from bizbooks.domain.documents import Company
from bizbooks.domain.value_objects import DocumentKind
from bizbooks.exceptions import DuplicateCompanyError
from bizbooks.logging_config import LogContext, configure_logging
from bizbooks.repositories.sqlite import (
    SQLiteCompanyRepository,
    SQLiteDatabase,
    SQLiteDocumentRepository,
)
from bizbooks.services.context import StaticSessionResolver, TenantContext
from bizbooks.services.currency import CurrencyFormatter
from bizbooks.services.document_lists import get_list_spec
from bizbooks.services.list_controller import (
    Empty,
    Failed,
    ListViewController,
    ViewState,
)


def get_default_db_path() -> Path:
    """Get the default database path in user's home directory."""
    return Path.home() / ".bizbooks" / "books.db"


def _db_path(args: argparse.Namespace) -> Path:
    return Path(args.database) if args.database else get_default_db_path()


def create_app(
    db_path: Path | None = None,
) -> tuple[SQLiteDatabase, SQLiteCompanyRepository, SQLiteDocumentRepository]:
    """Create and initialize the database and its repositories."""
    if db_path is None:
        db_path = get_default_db_path()

    db_path.parent.mkdir(parents=True, exist_ok=True)

    db = SQLiteDatabase(str(db_path))
    db.initialize()

    return db, SQLiteCompanyRepository(db), SQLiteDocumentRepository(db)


def _open_existing(
    args: argparse.Namespace,
) -> tuple[SQLiteDatabase, SQLiteCompanyRepository, SQLiteDocumentRepository] | None:
    db_path = _db_path(args)
    if not db_path.exists():
        print(f"Error: Database not found at {db_path}")
        print("Run 'bizbooks init' to create a new database")
        return None
    return create_app(db_path)


class StderrNotifier:
    def notify_error(self, message: str) -> None:
        print(f"Error: {message}", file=sys.stderr)


def cmd_init(args: argparse.Namespace) -> int:
    """Initialize a new database."""
    db_path = _db_path(args)

    if db_path.exists() and not args.force:
        print(f"Database already exists at {db_path}")
        print("Use --force to reinitialize (WARNING: will delete existing data)")
        return 1

    if db_path.exists() and args.force:
        db_path.unlink()

    db, _, _ = create_app(db_path)
    db.close()

    print(f"Initialized database at {db_path}")
    return 0


def cmd_status(args: argparse.Namespace) -> int:
    """Show database status."""
    db_path = _db_path(args)

    if not db_path.exists():
        print(f"No database found at {db_path}")
        print("Run 'bizbooks init' to create a new database")
        return 1

    db, companies, documents = create_app(db_path)
    try:
        print(f"Database: {db_path}")
        print(f"Companies: {len(list(companies.list_all()))}")
        for kind in DocumentKind:
            print(f"  - {kind.label}: {documents.count(kind)}")
    finally:
        db.close()
    return 0


def cmd_version(args: argparse.Namespace) -> int:
    """Show version information."""
    print(f"BizBooks v{__version__}")
    return 0


def cmd_company_add(args: argparse.Namespace) -> int:
    """Register a company."""
    opened = _open_existing(args)
    if opened is None:
        return 1
    db, companies, _ = opened

    company = Company(
        id=args.id or str(uuid4()),
        name=args.name,
        currency=args.currency.upper(),
    )

    try:
        companies.add(company)
    except DuplicateCompanyError as e:
        print(f"Error: {e.message}")
        return 1
    finally:
        db.close()

    print(f"Added company {company.name} ({company.id})")
    return 0


def cmd_company_list(args: argparse.Namespace) -> int:
    """List companies."""
    opened = _open_existing(args)
    if opened is None:
        return 1
    db, companies, _ = opened

    try:
        rows = list(companies.list_all())
    finally:
        db.close()

    if not rows:
        print("No companies found.")
        return 0

    for company in rows:
        print(f"{company.id}\t{company.name}\t{company.currency}")
    return 0


def _print_table(headers: list[str], rows: list[list[str]]) -> None:
    widths = [len(h) for h in headers]
    for row in rows:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(cell))

    def line(cells: list[str]) -> str:
        return "  ".join(cell.ljust(widths[i]) for i, cell in enumerate(cells)).rstrip()

    print(line(headers))
    print("  ".join("-" * w for w in widths))
    for row in rows:
        print(line(row))


def cmd_list(args: argparse.Namespace) -> int:
    """Show one document list for a company or user."""
    opened = _open_existing(args)
    if opened is None:
        return 1
    db, companies, documents = opened
    settings = get_settings()

    try:
        tenants = TenantContext()
        if args.company:
            company = companies.get(args.company)
            if company is None:
                print(f"Error: Company not found: {args.company}")
                return 1
            tenants.select(company)

        session = StaticSessionResolver.from_user_id(args.user or settings.user_id)
        spec = get_list_spec(args.kind)
        controller = ListViewController(
            spec, documents, tenants, session, StderrNotifier()
        )
        with LogContext(command="list", kind=spec.kind.value):
            state: ViewState = asyncio.run(controller.refresh())
    finally:
        db.close()

    print(spec.title)
    if isinstance(state, Failed):
        return 1
    if isinstance(state, Empty):
        print(state.message)
        return 1 if state.no_context else 0

    formatter = CurrencyFormatter(settings.currency)
    table = controller.table_rows(formatter, settings.date_format)
    _print_table(
        [c.header for c in spec.columns],
        [[row[c.key] for c in spec.columns] for row in table],
    )
    return 0


def cmd_serve(args: argparse.Namespace) -> int:
    """Run the HTTP API."""
    import uvicorn

    uvicorn.run(
        "bizbooks.api.app:app",
        host=args.host,
        port=int(args.port),
        reload=bool(args.reload),
    )
    return 0


def cmd_ui(args: argparse.Namespace) -> int:
    """Launch the NiceGUI web interface."""
    try:
        from bizbooks.ui.main import run
    except ImportError:
        print("Frontend dependencies are not installed.")
        print("Install with: pip install 'bizbooks[frontend]'")
        return 1

    try:
        run(port=args.port, api_url=args.api_url, reload=bool(args.reload))
    except ImportError as e:
        print(str(e))
        return 1
    return 0


def main(argv: list[str] | None = None) -> int:
    settings = get_settings()
    configure_logging(settings)
    parser = argparse.ArgumentParser(
        prog="bizbooks",
        description="BizBooks - Document lists for small business books",
    )
    parser.add_argument(
        "--database",
        "-d",
        help="Path to SQLite database file",
        default=None,
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # init command
    init_parser = subparsers.add_parser("init", help="Initialize a new database")
    init_parser.add_argument(
        "--force",
        "-f",
        action="store_true",
        help="Force reinitialization (deletes existing data)",
    )
    init_parser.set_defaults(func=cmd_init)

    # status command
    status_parser = subparsers.add_parser("status", help="Show database status")
    status_parser.set_defaults(func=cmd_status)

    # version command
    version_parser = subparsers.add_parser("version", help="Show version")
    version_parser.set_defaults(func=cmd_version)

    # company command group
    company_parser = subparsers.add_parser("company", help="Company commands")
    company_subparsers = company_parser.add_subparsers(
        dest="company_command", help="Company subcommands"
    )

    company_add_parser = company_subparsers.add_parser("add", help="Add a company")
    company_add_parser.add_argument("name", help="Company name")
    company_add_parser.add_argument("--id", default=None, help="Company id (default: generated)")
    company_add_parser.add_argument(
        "--currency",
        default=settings.currency,
        help=f"Currency code (default: {settings.currency})",
    )
    company_add_parser.set_defaults(func=cmd_company_add)

    company_list_parser = company_subparsers.add_parser("list", help="List companies")
    company_list_parser.set_defaults(func=cmd_company_list)

    # list command
    list_parser = subparsers.add_parser("list", help="Show a document list")
    list_parser.add_argument(
        "kind",
        choices=[k.value for k in DocumentKind],
        help="Document kind",
    )
    list_parser.add_argument("--company", "-c", default=None, help="Company id")
    list_parser.add_argument(
        "--user", "-u", default=None, help="User id (expenses are listed per user)"
    )
    list_parser.set_defaults(func=cmd_list)

    # serve command
    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", default=settings.api_host, help="Bind address")
    serve_parser.add_argument("--port", type=int, default=settings.api_port, help="Port")
    serve_parser.add_argument("--reload", action="store_true", help="Enable hot reload")
    serve_parser.set_defaults(func=cmd_serve)

    # ui command
    ui_parser = subparsers.add_parser("ui", help="Launch the NiceGUI web interface")
    ui_parser.add_argument(
        "--port",
        type=int,
        default=settings.ui_port,
        help=f"Port to run frontend (default: {settings.ui_port})",
    )
    ui_parser.add_argument(
        "--api-url",
        default=settings.api_url,
        help=f"Backend API base URL (default: {settings.api_url})",
    )
    ui_parser.add_argument(
        "--reload",
        action="store_true",
        help="Enable hot reload",
    )
    ui_parser.set_defaults(func=cmd_ui)

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    if args.command == "company" and (
        not hasattr(args, "company_command") or args.company_command is None
    ):
        company_parser.print_help()
        return 0

    result: int = args.func(args)
    return result


if __name__ == "__main__":
    sys.exit(main())
