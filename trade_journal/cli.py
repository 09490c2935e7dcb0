import datetime
import logging
import sys

import click

from trade_journal.config import Settings

logger = logging.getLogger(__name__)


def _parse_date(ctx, param, value):
    if value is None:
        return None
    try:
        return datetime.date.fromisoformat(value)
    except ValueError:
        raise click.BadParameter("expected a date in YYYY-MM-DD format")


@click.group()
@click.option('--database-url', envvar='DATABASE_URL', help='Database URL (defaults to the configured one).')
@click.option('--verbose', is_flag=True, help='Enable verbose logging.')
@click.pass_context
def cli(ctx, database_url, verbose):
    """A CLI tool for the Trade Journal application."""
    from trade_journal.logging_config import configure_logging

    settings = Settings(database_url=database_url, log_level='DEBUG' if verbose else None)
    # Logs go to stderr so command output (e.g. summary JSON) stays parseable
    configure_logging(settings.LOG_LEVEL, stream=sys.stderr)
    ctx.obj = settings


def _open_database(settings: Settings):
    from trade_journal.db.session import Database

    logger.debug("Opening database %s", settings.DATABASE_URL)
    return Database(settings.DATABASE_URL, echo=settings.SQL_ECHO)


@cli.command('init-db')
@click.pass_obj
def init_db(settings):
    """Creates all tables on the configured database."""
    database = _open_database(settings)
    try:
        database.create_all()
    finally:
        database.dispose()
    click.echo(f"Database initialized: {database.engine.url!r}")


@cli.command()
@click.option('--email', required=True, help='Email of the user to summarize.')
@click.option('--from', 'date_from', callback=_parse_date, help='Inclusive start date (YYYY-MM-DD).')
@click.option('--to', 'date_to', callback=_parse_date, help='Inclusive end date (YYYY-MM-DD).')
@click.pass_obj
def summary(settings, email, date_from, date_to):
    """Prints a user's dashboard summary as JSON."""
    from crud import crud_daily_entry, crud_user
    from trade_journal.analytics import build_dashboard_summary

    database = _open_database(settings)
    try:
        with database.session() as db:
            user = crud_user.user.get_user_by_email(db, email=email)
            if user is None:
                raise click.ClickException(f"No user with email {email}")
            entries = crud_daily_entry.daily_entry.list_entries(
                db, user_id=user.id, date_from=date_from, date_to=date_to
            )
            result = build_dashboard_summary(entries, date_from=date_from, date_to=date_to)
    finally:
        database.dispose()
    click.echo(result.model_dump_json(by_alias=True, indent=2))


@cli.command()
@click.option('--host', default='127.0.0.1', show_default=True)
@click.option('--port', default=8000, show_default=True, type=int)
@click.option('--reload', is_flag=True, help='Reload on code changes (development only).')
def serve(host, port, reload):
    """Runs the HTTP API with uvicorn."""
    import uvicorn

    uvicorn.run('api.main:app', host=host, port=port, reload=reload)


if __name__ == '__main__':
    cli()
