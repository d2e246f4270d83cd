"""Process helpers shared by the runner modules."""

import logging
import os
import shlex
import subprocess
from typing import List

import psutil


def format_command(cmd: List[str]) -> str:
    """Join a command for display, quoting arguments that need it."""
    if os.name == "nt":
        return subprocess.list2cmdline(cmd)
    return shlex.join(cmd)


def kill_process_tree(pid: int, timeout: float = 3) -> int:
    """Terminate a process and all of its children.

    Children are terminated before their parents; processes still alive
    after `timeout` seconds are killed.

    Args:
        pid: Root process id
        timeout: Grace period before force killing

    Returns:
        Number of processes signalled
    """
    try:
        root_proc = psutil.Process(pid)
    except psutil.NoSuchProcess:
        return 0

    try:
        children = root_proc.children(recursive=True)
    except psutil.NoSuchProcess:
        children = []

    processes = list(reversed(children)) + [root_proc]
    signalled: List[psutil.Process] = []
    for proc in processes:
        try:
            proc.terminate()
            signalled.append(proc)
            logging.debug(f"Terminated process {proc.pid}")
        except psutil.NoSuchProcess:
            pass  # Already dead
        except psutil.AccessDenied as e:
            logging.warning(f"Failed to terminate process {proc.pid}: {e}")

    _gone, alive = psutil.wait_procs(signalled, timeout=timeout)
    for proc in alive:
        try:
            proc.kill()
            logging.warning(f"Force killed stubborn process {proc.pid}")
        except psutil.NoSuchProcess:
            pass
        except psutil.AccessDenied as e:
            logging.warning(f"Failed to force kill process {proc.pid}: {e}")

    return len(signalled)
