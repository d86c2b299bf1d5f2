import os
from typing import Optional

import typer
from dotenv import load_dotenv

from suggestbox.application.engine import ComboBoxEngine
from suggestbox.config import SuggestBoxSettings, load_settings
from suggestbox.core.scheduler import AsyncioScheduler
from suggestbox.infrastructure.transport import (
    SAMPLE_TITLES,
    HttpTransport,
    InMemoryTransport,
    prefix_lookup,
)
from suggestbox.logger import get_logger, setup_logger
from suggestbox.presentation.tui import SuggestBoxApp

cli = typer.Typer(
    name="suggestbox",
    help="Terminal search box with as-you-type suggestions",
    epilog="""
    Examples:
    $ suggestbox
    $ suggestbox --offline --debounce 0.2
    """,
    add_completion=False,
)


def build_app(settings: SuggestBoxSettings, transport=None) -> SuggestBoxApp:
    """
    Assemble the engine and its front end from settings.

    Args:
        settings: Validated settings
        transport: Transport to use. If None, an HttpTransport is created, or an
                   InMemoryTransport over the sample titles in offline mode.
    """
    logger = get_logger("main")
    scheduler = AsyncioScheduler()

    if transport is None:
        if settings.offline:
            transport = InMemoryTransport(
                endpoint=settings.endpoint,
                lookup=prefix_lookup(SAMPLE_TITLES),
            )
            logger.info("Offline mode: answering from the built-in title list")
        else:
            transport = HttpTransport()

    engine = ComboBoxEngine(
        transport,
        scheduler,
        endpoint=settings.endpoint,
        debounce_seconds=settings.debounce_seconds,
    )
    return SuggestBoxApp(engine, transport=transport)


@cli.command()
def main(
    debug: bool = typer.Option(os.getenv("DEBUG", "false").lower() == "true", "--debug", help="Enable debug logging"),
    offline: Optional[bool] = typer.Option(None, "--offline/--online", help="Answer from built-in titles instead of the network"),
    endpoint: Optional[str] = typer.Option(None, "--endpoint", help="Lookup endpoint; the encoded query is appended"),
    debounce: Optional[float] = typer.Option(None, "--debounce", help="Seconds of quiet before a lookup"),
):
    """Run the combo box."""
    load_dotenv()

    settings = load_settings(
        endpoint=endpoint,
        debounce_seconds=debounce,
        offline=offline,
        log_level="DEBUG" if debug else None,
    )
    setup_logger(log_level=settings.log_level)
    logger = get_logger("main")
    logger.info(f"Starting suggestbox (endpoint={settings.endpoint}, debounce={settings.debounce_seconds}s)")

    app = build_app(settings)
    app.run()
    logger.info(f"suggestbox exited after {len(app.selections)} selection(s)")


def run():
    """Entry point for the suggestbox console script."""
    cli()


if __name__ == "__main__":
    run()
