"""``mrologix api`` subcommands: run the server and report whether the assistant can answer."""

from __future__ import annotations

from rich.console import Console
from rich.table import Table

from mrologix.assistant import loop, service
from mrologix.assistant.registry import list_functions
from mrologix.db.connect import get_db_path
from mrologix.logging import get_logger

logger = get_logger(__file__)


def register_subcommands(subparsers):
    subparsers.add_parser("status", help="Show assistant provider and database configuration")
    starter_parser = subparsers.add_parser("start", help="Start the API server")
    starter_parser.add_argument("--host", default="localhost", help="Host to run the API server on")
    starter_parser.add_argument("--port", type=int, default=8000, help="Port to run the API server on")


def collect_status() -> dict[str, str]:
    """Settings the chat endpoint will use, without secrets."""

    provider = service._provider()
    return {
        "provider": provider,
        "configured": "yes" if service.provider_configured() else "no",
        "model": "-" if provider == "stub" else service._openai_model(),
        "base_url": "-" if provider == "stub" else service._openai_url(),
        "functions": str(len(list_functions())),
        "max_follow_up_rounds": str(loop._max_follow_up_rounds()),
        "database": get_db_path(),
    }


def _render_status(status: dict[str, str], console: Console | None = None) -> None:
    if console is None:
        console = Console()
    table = Table(title="MRO Logix assistant")
    table.add_column("Setting", style="bold cyan")
    table.add_column("Value", style="green")
    for key, value in status.items():
        table.add_row(key, value)
    console.print(table)


def dispatch(args):
    """Run the API subcommand named by ``args.subcommand``.

    Unknown subcommands raise ``ValueError``.
    """

    def _status() -> None:
        status = collect_status()
        _render_status(status)
        if status["configured"] != "yes":
            logger.warning(
                "Provider %s is not configured; /api/ai-chat will answer 500 until "
                "MROLOGIX_OPENAI_API_KEY is set",
                status["provider"],
            )

    def _start() -> None:
        from mrologix.api.main import app
        import uvicorn

        if not service.provider_configured():
            logger.warning("Starting without a configured assistant provider")
        logger.info("Starting API server at %s:%s", args.host, args.port)
        uvicorn.run(app, host=args.host, port=args.port)

    commands = {"status": _status, "start": _start}
    try:
        handler = commands[args.subcommand]
    except KeyError as exc:
        message = f"No handler for API subcommand: {args.subcommand}"
        logger.error(message)
        raise ValueError(message) from exc

    handler()
