from roamclosure.cli import cli

cli()
