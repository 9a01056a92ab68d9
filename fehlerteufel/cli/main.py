import click
from fehlerteufel.config import get_default_config
from fehlerteufel.errors import CatalogError
from fehlerteufel.runtime.catalog import Catalog
from fehlerteufel.runtime.severity import Severity


def _load(path, locale=""):
    try:
        return Catalog.load_directory(path, locale=locale)
    except (FileNotFoundError, CatalogError) as e:
        click.echo(f"Error: {e}", err=True)
        raise click.Abort()


@click.group()
def cli(): ...

@cli.command()
@click.argument("path")
def check(path):
    """
    Check the string tables in PATH.

    \b
    Reports every template that uses a placeholder its source text
    never binds. Leaving a placeholder out is fine.

    \b
    Layout:
      PATH/<Table>.yaml            - base language
      PATH/<locale>/<Table>.yaml   - translations (.yml and .json work too)
    """
    catalog = _load(path)
    issues = catalog.check()
    for issue in issues:
        click.echo(str(issue), err=True)
    if issues:
        raise SystemExit(f"{len(issues)} issue(s) found")
    click.echo(f"OK ({len(catalog.locales())} locale(s))")

@cli.command()
@click.argument("key")
@click.option("--dir", "path", required=True, help="String table directory")
@click.option("--table", default=None, help="Table name (default: configured default table)")
@click.option("--locale", default="", help="Locale, e.g. de_DE (default: base language)")
def lookup(key, path, table, locale):
    """Print the text KEY resolves to."""
    catalog = _load(path, locale)
    click.echo(catalog.lookup(key, table or get_default_config().default_table))

@cli.command()
@click.option("--dir", "path", default=None, help="String table directory")
@click.option("--locale", default="", help="Locale, e.g. de_DE (default: base language)")
def severities(path, locale):
    """List severity levels with their descriptions."""
    catalog = _load(path, locale) if path else Catalog(locale=locale)
    for severity in Severity:
        click.echo(f"{severity.value:<8} {severity.describe(catalog)}")

if __name__ == "__main__":
    cli()
