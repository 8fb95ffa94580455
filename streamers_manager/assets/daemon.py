"""Minimal pid-file daemon control for the recorder bot."""

import os
import signal
import subprocess
import sys


class Daemon:
    def __init__(self, pid_file, log_file):
        self.pid_file = pid_file
        self.log_file = log_file

    def read_pid(self):
        try:
            with open(self.pid_file, "r", encoding="utf-8") as f:
                return int(f.read().strip())
        except (OSError, ValueError):
            return None

    def is_running(self):
        pid = self.read_pid()
        if pid is None:
            return False
        try:
            os.kill(pid, 0)
        except OSError:
            return False
        return True

    def start(self, script):
        if self.is_running():
            print("Recorder is already running")
            return False
        with open(self.log_file, "a", encoding="utf-8") as log:
            proc = subprocess.Popen(
                [sys.executable, script],
                stdout=log,
                stderr=subprocess.STDOUT,
                stdin=subprocess.DEVNULL,
                start_new_session=True,
            )
        with open(self.pid_file, "w", encoding="utf-8") as f:
            f.write(str(proc.pid))
        print("Recorder started, pid", proc.pid)
        return True

    def stop(self):
        pid = self.read_pid()
        if pid is not None and self.is_running():
            os.kill(pid, signal.SIGTERM)
            print("Recorder stopped")
        if os.path.exists(self.pid_file):
            os.remove(self.pid_file)

    def restart(self, script):
        self.stop()
        return self.start(script)
