from verifier.app.main import run

run()
