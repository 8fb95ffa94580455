"""Reads and writes the shared configs/config.json used by the recorder."""

import json
import os

CONFIG_FILE = os.path.join("configs", "config.json")
PID_FILE = os.path.join("configs", "recorder.pid")
LOG_FILE = os.path.join("configs", "rb.log")


def load():
    with open(CONFIG_FILE, "r", encoding="utf-8") as f:
        return json.load(f)


def save(cfg):
    tmp = CONFIG_FILE + ".tmp"
    with open(tmp, "w", encoding="utf-8") as f:
        json.dump(cfg, f, indent=2)
        f.write("\n")
    os.replace(tmp, CONFIG_FILE)


def add_streamer(name):
    cfg = load()
    if name in cfg["streamers"]:
        return False
    cfg["streamers"].append(name)
    save(cfg)
    return True


def remove_streamer(name):
    cfg = load()
    if name not in cfg["streamers"]:
        return False
    cfg["streamers"].remove(name)
    save(cfg)
    return True


def export_list(path=None):
    cfg = load()
    path = path or cfg.get("default_export_location", "./list.txt")
    with open(path, "w", encoding="utf-8") as f:
        for name in cfg["streamers"]:
            f.write(name + "\n")
    return path


def import_list(path):
    with open(path, "r", encoding="utf-8") as f:
        names = [line.strip() for line in f if line.strip() and not line.startswith("#")]
    added = [name for name in names if add_streamer(name)]
    return added
