"""Recorder loop: runs the downloader for every configured streamer."""

import signal
import subprocess
import sys
import time

import config

URL_TEMPLATE = "https://chaturbate.com/{}/"


class Bot:
    def __init__(self):
        self.running = True
        self.processes = {}
        self.cfg = config.load()

    def handle_signal(self, signum, frame):
        self.running = False

    def reap(self):
        for name, proc in list(self.processes.items()):
            if proc.poll() is not None:
                print("Recording of", name, "ended with", proc.returncode, flush=True)
                del self.processes[name]

    def record(self, name):
        cmd = [
            self.cfg["youtube-dl_cmd"],
            "--config-location", self.cfg["youtube-dl_config"],
            URL_TEMPLATE.format(name),
        ]
        try:
            self.processes[name] = subprocess.Popen(cmd, stdout=subprocess.DEVNULL, stderr=subprocess.DEVNULL)
            print("Recording", name, flush=True)
        except OSError as e:
            print("Could not start downloader for", name, e, flush=True)

    def run(self):
        signal.signal(signal.SIGTERM, self.handle_signal)
        while self.running:
            if self.cfg.get("auto_reload_config", True):
                self.cfg = config.load()
            self.reap()
            for name in self.cfg["streamers"]:
                if not self.running:
                    break
                if name not in self.processes:
                    self.record(name)
                    if self.cfg.get("rate_limit", True):
                        time.sleep(self.cfg.get("rate_limit_time", 5))
            time.sleep(10)
        for proc in self.processes.values():
            proc.terminate()
        return 0


if __name__ == "__main__":
    sys.exit(Bot().run())
