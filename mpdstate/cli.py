# Command line front end
#
#   mpdstate [OPTIONS ...] [CMD ARGS]
#   mpdstate [OPTIONS ...] -1 [PROPERTYNAME]

import argparse
import sys

from . import child, config
from .errors import MPDStateError
from .mpd_conn import MPDConnection
from .watcher import Watcher, parse_selector

NAME = "mpdstate"
VERSION = "0.3.0"

HELP_EPILOG = (
    "Arguments\n"
    f" When present, {NAME} executes CMD ARGS that receives\n"
    f" the output of {NAME}. Nothing is output on stdout\n"
)

def log_error(msg, err=None):
    """
    One diagnostic line on stderr: "mpdstate: <what>[: <why>]".
    """
    line = f"{NAME}: {msg}"
    if err is not None:
        line += f": {err}"
    print(line, file=sys.stderr, flush=True)

def build_parser() -> argparse.ArgumentParser:
    # -h is the host, like mpc; help lives on -? / --help
    p = argparse.ArgumentParser(
        prog=NAME,
        description="watch MPD state",
        epilog=HELP_EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        add_help=False,
    )
    p.add_argument("-?", "--help", action="store_true", dest="show_help",
                   help="Show this help message")
    p.add_argument("-V", "--version", action="store_true",
                   help="Show version")
    p.add_argument("-h", "--host", help="Connect to MPD on HOST")
    p.add_argument("-p", "--port", help="MPD on PORT")
    p.add_argument("-1", dest="once", action="store_true",
                   help="Output all properties, or PROPERTYNAME, and exit")
    p.add_argument("args", nargs=argparse.REMAINDER,
                   help="CMD ARGS, or PROPERTYNAME with -1")
    return p

def main(argv=None) -> int:
    parser = build_parser()
    opts = parser.parse_args(argv)

    if opts.version:
        print(f"{NAME}: {VERSION}", file=sys.stderr)
        return 0
    if opts.show_help:
        parser.print_help(sys.stderr)
        return 1

    try:
        host, port = config.resolve(opts.host, opts.port)
    except ValueError as e:
        log_error("bad port", e)
        return 1

    selector = None
    cmd = None
    if opts.once and opts.args:
        # fetch only 1 property, extra args are ignored
        selector = parse_selector(opts.args[0])
    elif opts.args:
        cmd = opts.args

    proc = None
    try:
        with MPDConnection.open(host, port) as conn:
            sink = sys.stdout
            if cmd:
                proc = child.spawn_consumer(cmd)
                sink = proc.stdin
            Watcher(conn, sink=sink, once=opts.once, selector=selector).run()
    except MPDStateError as e:
        log_error(e)
        return 1
    except BrokenPipeError as e:
        log_error("write", e.strerror)
        return 1
    except KeyboardInterrupt:
        # Ctrl-C, usually while blocked in idle
        return 130
    finally:
        if proc is not None:
            child.close_consumer(proc)
    return 0
