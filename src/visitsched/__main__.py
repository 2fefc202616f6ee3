from visitsched.cli.main import app

app(prog_name="visitsched")
