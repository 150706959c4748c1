"""
Pyramid League - Main Entry Point
Runs the FastAPI backend under uvicorn
"""

import os
import signal
import subprocess
import sys


def main():
    os.chdir(os.path.dirname(os.path.abspath(__file__)))

    host = os.environ.get("HOST", "0.0.0.0")
    port = os.environ.get("PORT", "8000")
    log_level = os.environ.get("PYRAMID_LOG_LEVEL", "info").lower()

    api_proc = subprocess.Popen([
        sys.executable, "-m", "uvicorn", "api.main:app",
        f"--host={host}", f"--port={port}",
        f"--log-level={log_level}",
    ])

    def shutdown(signum, frame):
        api_proc.terminate()
        sys.exit(0)

    signal.signal(signal.SIGTERM, shutdown)
    signal.signal(signal.SIGINT, shutdown)

    try:
        api_proc.wait()
    except KeyboardInterrupt:
        pass
    finally:
        api_proc.terminate()


if __name__ == "__main__":
    main()
