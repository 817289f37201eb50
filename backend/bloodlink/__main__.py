from bloodlink.main import run

run()
