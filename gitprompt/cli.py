import logging
import sys

import click

from gitprompt.errors import GitPromptError, NotARepositoryError, UnitFailedError
from gitprompt.git_ops import QueryExecutor
from gitprompt.report import format_report
from gitprompt.services import collect_status
from gitprompt.settings import Settings, load_settings

logger = logging.getLogger(__name__)


def _configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.WARNING,
        format="%(asctime)s %(threadName)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
def main() -> None:
    """Print `branch ahead behind staged conflicts modified untracked deleted`."""
    try:
        settings = load_settings()
    except GitPromptError as exc:
        click.echo(f"gitprompt: {exc}", err=True)
        raise SystemExit(1)
    _configure_logging(settings)

    executor = QueryExecutor(timeout=settings.timeout)
    try:
        report = collect_status(executor, max_workers=settings.max_workers)
    except NotARepositoryError as exc:
        logger.debug("%s", exc)
        raise SystemExit(1)
    except UnitFailedError as exc:
        click.echo(f"gitprompt: error executing {exc.slot}: {exc.cause}", err=True)
        raise SystemExit(1)
    except GitPromptError as exc:
        click.echo(f"gitprompt: {exc}", err=True)
        raise SystemExit(1)

    click.echo(format_report(report))


if __name__ == "__main__":
    main()
