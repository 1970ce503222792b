from edaqor.cli.main import app

app(prog_name="edaqor")
