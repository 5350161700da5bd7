# Consumer process
# starts CMD ARGS with our output piped into its stdin

import subprocess

from .errors import MPDStateError

def spawn_consumer(cmd):
    """
    Start cmd with a text pipe on its stdin. Write to proc.stdin instead of stdout.
    """
    try:
        return subprocess.Popen(
            cmd,
            stdin=subprocess.PIPE,
            text=True
        )
    except OSError as e:
        raise MPDStateError(f"execvp {cmd[0]} ...", e) from e

def close_consumer(proc):
    """
    Close the pipe (the consumer sees EOF) and wait for it. Returns its exit code.
    """
    try:
        proc.stdin.close()
    except BrokenPipeError:
        pass
    return proc.wait()
