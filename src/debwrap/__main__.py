from debwrap import cli

cli.cli()
