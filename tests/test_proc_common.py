import mmap
import multiprocessing
import os
import signal
import sys
from unittest import mock

import pytest

from forktree.proc_common import (
    WaitStatusError,
    change_pname,
    compute,
    create_shared_memory_area,
    describe_wait_status,
    explain_wait_status,
    show_pstree,
    wait_for_ready_children,
    wait_forever,
)

_STOP_SELF = "import os, signal; os.kill(os.getpid(), signal.SIGSTOP)"
_KILL_SELF = "import os, signal; os.kill(os.getpid(), signal.SIGKILL)"


def _spawn(code):
    return os.posix_spawn(sys.executable, [sys.executable, "-c", code], os.environ)


def _exited_child(code):
    pid = _spawn(f"import sys; sys.exit({code})")
    _, status = os.waitpid(pid, 0)
    return pid, status


def _read_comm():
    with open("/proc/self/comm", encoding="utf-8") as handle:
        return handle.read().rstrip("\n")


def _fill_area(area):
    area[0:5] = b"hello"


def test_compute_zero_does_nothing():
    assert compute(0) == 0


def test_compute_counts_millions():
    assert compute(1) == 1000000


def test_wait_forever_keeps_sleeping():
    class _Stop(Exception):
        pass

    with mock.patch("time.sleep", side_effect=[None, None, _Stop()]) as sleep:
        with pytest.raises(_Stop):
            wait_forever()
    assert sleep.call_count == 3
    assert all(call.args == (100,) for call in sleep.call_args_list)


def test_describe_exited_child():
    pid, status = _exited_child(13)
    text = describe_wait_status(pid, status)
    assert text == (
        f"My PID = {os.getpid()}: Child PID = {pid} terminated normally, "
        "exit status = 13"
    )


def test_describe_signalled_child():
    pid = _spawn(_KILL_SELF)
    _, status = os.waitpid(pid, 0)
    text = describe_wait_status(pid, status)
    assert text.endswith(f"was terminated by a signal, signo = {int(signal.SIGKILL)}")


def test_describe_stopped_child():
    pid = _spawn(_STOP_SELF)
    _, status = os.waitpid(pid, os.WUNTRACED)
    try:
        text = describe_wait_status(pid, status)
    finally:
        os.kill(pid, signal.SIGCONT)
        os.waitpid(pid, 0)
    assert text.endswith(f"has been stopped by a signal, signo = {int(signal.SIGSTOP)}")


def test_describe_continued_status_is_error():
    pid = _spawn(_STOP_SELF)
    os.waitpid(pid, os.WUNTRACED)
    os.kill(pid, signal.SIGCONT)
    _, status = os.waitpid(pid, os.WCONTINUED)
    os.waitpid(pid, 0)
    assert os.WIFCONTINUED(status)
    with pytest.raises(WaitStatusError, match="Unhandled case"):
        describe_wait_status(pid, status)


def test_explain_writes_to_stderr(capsys):
    pid, status = _exited_child(19)
    explain_wait_status(pid, status)
    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err == describe_wait_status(pid, status) + "\n"


def test_wait_for_ready_children_returns_stopped_pids():
    pid = _spawn(_STOP_SELF)
    try:
        stopped = wait_for_ready_children(1)
    finally:
        os.kill(pid, signal.SIGCONT)
        os.waitpid(pid, 0)
    assert stopped == [pid]


def test_wait_for_ready_children_rejects_dead_child():
    pid = _spawn("pass")
    with pytest.raises(WaitStatusError, match=f"PID {pid} has died unexpectedly"):
        wait_for_ready_children(1)


def test_change_pname_sets_and_truncates():
    original = _read_comm()
    try:
        change_pname("worker")
        assert _read_comm() == "worker"
        change_pname("abcdefghijklmnopqrstuvwxyz")
        assert _read_comm() == "abcdefghijklmnopqrstuvwxyz"[:15]
    finally:
        change_pname(original)
    assert _read_comm() == original


def test_show_pstree_runs_shell_command():
    completed = mock.Mock(returncode=0)
    with mock.patch("subprocess.run", return_value=completed) as run:
        result = show_pstree(4242)
    assert result == 0
    command = run.call_args.args[0]
    assert command == "echo; echo; pstree -G -c -p 4242; echo; echo"
    assert run.call_args.kwargs["shell"] is True


def test_shared_memory_rounds_up_to_pages():
    area = create_shared_memory_area(1)
    try:
        assert len(area) == mmap.PAGESIZE
    finally:
        area.close()
    area = create_shared_memory_area(mmap.PAGESIZE + 1)
    try:
        assert len(area) == 2 * mmap.PAGESIZE
    finally:
        area.close()


def test_shared_memory_zero_is_error():
    with pytest.raises(ValueError, match="numbytes == 0"):
        create_shared_memory_area(0)


def test_shared_memory_visible_to_child_writes():
    area = create_shared_memory_area(64)
    try:
        worker = multiprocessing.get_context("fork").Process(
            target=_fill_area, args=(area,)
        )
        worker.start()
        worker.join()
        assert worker.exitcode == 0
        assert area[0:5] == b"hello"
    finally:
        area.close()