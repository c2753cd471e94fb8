from vhostup.cli import app

app()
