from clipfeed.cli import app

app()
