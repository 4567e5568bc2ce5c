from daily_cheer.cli import cli

cli()
