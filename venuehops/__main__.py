from venuehops.cli import app

app()
