"""CLI entry point for forvo-pronounce."""

from pathlib import Path

import click
from loguru import logger

from . import __version__
from .ankiconnect import store_media_file
from .config import (
    APP_NAME,
    ForvoSettings,
    UserConfig,
    load_user_config,
    save_user_config,
)
from .errors import ForvoError
from .runner import run_pipeline

log = logger.bind(stage="cli")


def _apply_saves(
    user_config: UserConfig,
    config_path: Path | None,
    save_key: str | None,
    save_collection: str | None,
    save_anki2_path: str | None,
) -> UserConfig:
    """Persist any --save-* values and return the updated record."""
    updates: dict[str, str] = {}
    if save_key is not None:
        updates["api_key"] = save_key
    if save_collection is not None:
        updates["default_collection"] = save_collection
    if save_anki2_path is not None:
        updates["anki2_path"] = save_anki2_path
    if not updates:
        return user_config

    user_config = user_config.model_copy(update=updates)
    saved_to = save_user_config(user_config, config_path)
    click.echo(f"Saved {', '.join(sorted(updates))} to {saved_to}")
    return user_config


@click.command()
@click.option("-w", "--word", default=None, help="Word to get the pronunciation for.")
@click.option("-k", "--key", "api_key", default=None, help="Forvo API key.")
@click.option(
    "-c", "--collection", default=None, help="Anki collection (profile) name."
)
@click.option(
    "-d",
    "--dlpath",
    type=click.Path(file_okay=False),
    default=None,
    help="Download location. Defaults to the collection's media folder.",
)
@click.option("--save-key", default=None, metavar="KEY", help="Save the Forvo API key.")
@click.option(
    "--save-collection",
    default=None,
    metavar="NAME",
    help="Save the default Anki collection name.",
)
@click.option(
    "--save-anki2-path",
    default=None,
    metavar="PATH",
    help="Save the Anki2 root folder (holds one folder per collection).",
)
@click.option(
    "--store-media",
    is_flag=True,
    help="Also register the downloaded file with Anki through AnkiConnect.",
)
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
@click.option(
    "--config",
    "config_file",
    type=click.Path(dir_okay=False),
    default=None,
    help="Path to the user config JSON file.",
)
@click.version_option(__version__, prog_name=APP_NAME)
def main(
    word: str | None,
    api_key: str | None,
    collection: str | None,
    dlpath: str | None,
    save_key: str | None,
    save_collection: str | None,
    save_anki2_path: str | None,
    store_media: bool,
    verbose: bool,
    config_file: str | None,
) -> None:
    """Download Russian pronunciation files from Forvo."""
    # Pass CLI flags as kwargs to avoid env pollution
    settings = ForvoSettings(verbose=verbose)
    settings.setup_logging()

    config_path = Path(config_file) if config_file else None
    try:
        user_config = load_user_config(config_path)
        user_config = _apply_saves(
            user_config, config_path, save_key, save_collection, save_anki2_path
        )
    except ForvoError as e:
        raise click.ClickException(str(e)) from e

    saving = any(v is not None for v in (save_key, save_collection, save_anki2_path))
    if saving and word is None:
        return

    # flag > FORVO_* env > saved config
    api_key = api_key or settings.api_key or user_config.api_key
    collection = collection or settings.collection or user_config.default_collection
    download_dir = (
        dlpath or settings.download_dir or user_config.media_dir(collection)
    )

    missing = []
    if not word:
        missing.append("--word")
    if not api_key:
        missing.append("--key (or --save-key)")
    if not download_dir:
        missing.append("--dlpath (or --save-anki2-path with a collection)")
    if missing:
        click.echo(f"Missing required value(s): {', '.join(missing)}")
        return

    log.info(f"Starting lookup: word={word!r} download_dir={download_dir}")
    try:
        result = run_pipeline(word, api_key, download_dir, settings=settings)
    except ForvoError as e:
        raise click.ClickException(str(e)) from e

    if not result.found:
        click.echo(f"No pronunciation found for '{result.normalized_word}'.")
        return
    click.echo(f"Pronunciation downloaded to: {result.file_path}")

    if store_media:
        try:
            stored = store_media_file(
                result.file_path,
                url=settings.ankiconnect_url,
                timeout=settings.request_timeout,
            )
        except ForvoError as e:
            raise click.ClickException(str(e)) from e
        click.echo(f"Stored in Anki media as: {stored}")
