from pod_reaper.main import run

run()
