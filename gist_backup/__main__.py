from gist_backup.main import cli

cli()
