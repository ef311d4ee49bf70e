from pg_relay.cli.main import run

run()
