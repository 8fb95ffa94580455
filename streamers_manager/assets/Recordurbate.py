#!/usr/bin/env python3
"""Recorder command line."""

import sys

import config
from daemon import Daemon

USAGE = """usage: Recordurbate.py <command> [argument]

commands:
  start           start recording in the background
  stop            stop recording
  restart         stop, then start recording
  add <name>      add a streamer
  del <name>      remove a streamer
  list            show streamers
  export [file]   write streamers to a file
  import <file>   add streamers from a file
"""


def main(argv):
    if not argv:
        print(USAGE)
        return 1

    command, args = argv[0], argv[1:]
    daemon = Daemon(config.PID_FILE, config.LOG_FILE)

    if command == "start":
        return 0 if daemon.start("bot.py") else 1
    if command == "stop":
        daemon.stop()
        return 0
    if command == "restart":
        return 0 if daemon.restart("bot.py") else 1
    if command == "add" and args:
        print("Added" if config.add_streamer(args[0]) else "Already present", args[0])
        return 0
    if command == "del" and args:
        print("Removed" if config.remove_streamer(args[0]) else "Not found", args[0])
        return 0
    if command == "list":
        for name in config.load()["streamers"]:
            print(name)
        return 0
    if command == "export":
        print("Exported to", config.export_list(args[0] if args else None))
        return 0
    if command == "import" and args:
        print("Imported", len(config.import_list(args[0])), "streamers")
        return 0

    print(USAGE)
    return 1


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
