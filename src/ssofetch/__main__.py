from ssofetch.cli import app

app(prog_name="ssofetch")
