"""
集群列表读取测试
"""

import random
import uuid

import pytest

from cleaner.cluster_list import read_cluster_list, write_cluster_list
from core.exceptions import ClusterListReadException

VALID = "5d5892d3-1f74-4ccf-91af-548dfc9767aa"


def _write(tmp_path, content: bytes):
    path = tmp_path / "cluster_list.txt"
    path.write_bytes(content)
    return str(path)


def test_empty_file(tmp_path):
    path = _write(tmp_path, b"")

    clusters, improper = read_cluster_list(path)

    assert clusters == []
    assert improper == 0


@pytest.mark.parametrize(
    "lines",
    [
        [VALID, "not-a-uuid"],
        ["not-a-uuid", VALID],
    ],
)
def test_one_valid_one_invalid_in_any_order(tmp_path, lines):
    path = _write(tmp_path, ("\n".join(lines) + "\n").encode())

    clusters, improper = read_cluster_list(path)

    assert clusters == [VALID]
    assert improper == 1


@pytest.mark.parametrize("seed", range(5))
def test_valid_entries_keep_file_order(tmp_path, seed):
    rnd = random.Random(seed)
    valid = [str(uuid.UUID(int=rnd.getrandbits(128))) for _ in range(rnd.randint(0, 8))]
    invalid = ["", "xyz", valid[0][:-1] if valid else "abc", " " + VALID][: rnd.randint(0, 4)]
    lines = [(v, True) for v in valid] + [(v, False) for v in invalid]
    rnd.shuffle(lines)
    path = _write(tmp_path, "".join(f"{line}\n" for line, _ in lines).encode())

    clusters, improper = read_cluster_list(path)

    assert clusters == [line for line, ok in lines if ok]
    assert improper == len(invalid)


def test_only_newline_is_stripped(tmp_path):
    path = _write(
        tmp_path,
        f"{VALID}\r\n {VALID}\n{VALID} \n\t{VALID}\n{VALID}\n".encode(),
    )

    clusters, improper = read_cluster_list(path)

    assert clusters == [VALID]
    assert improper == 4


def test_blank_lines_are_improper(tmp_path):
    path = _write(tmp_path, f"\n{VALID}\n\n".encode())

    clusters, improper = read_cluster_list(path)

    assert clusters == [VALID]
    assert improper == 2


def test_last_line_without_newline_is_read(tmp_path):
    other = "b0c2d108-f0b4-4b6c-9f5a-8b3a7f3cbe1e"
    path = _write(tmp_path, f"{VALID}\n{other}".encode())

    clusters, improper = read_cluster_list(path)

    assert clusters == [VALID, other]
    assert improper == 0


def test_duplicates_are_kept(tmp_path):
    path = _write(tmp_path, f"{VALID}\n{VALID}\n".encode())

    clusters, _ = read_cluster_list(path)

    assert clusters == [VALID, VALID]


def test_missing_file_raises_os_error(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_cluster_list(str(tmp_path / "missing.txt"))


def test_non_utf8_line_is_improper(tmp_path, log_messages):
    path = _write(tmp_path, f"{VALID}\n".encode() + b"\xff\xfe-garbage\n" + f"{VALID}\n".encode())

    clusters, improper = read_cluster_list(path)

    assert clusters == [VALID, VALID]
    assert improper == 1
    assert any(m.startswith("Not a proper cluster ID:") for m in log_messages)


def test_non_utf8_bytes_after_many_lines(tmp_path):
    valid_lines = 500
    path = _write(
        tmp_path,
        b"bad\n" + f"{VALID}\n".encode() * valid_lines + b"\xff\xfe\n" + f"{VALID}\n".encode(),
    )

    clusters, improper = read_cluster_list(path)

    assert len(clusters) == valid_lines + 1
    assert improper == 2


class _FailingFile:
    """读到第二行时抛出 OSError 的文件对象"""

    def __init__(self, lines):
        self._lines = lines

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def __iter__(self):
        yield from self._lines
        raise OSError(5, "Input/output error")


def test_read_error_keeps_partial_result(tmp_path, monkeypatch):
    path = _write(tmp_path, b"")
    monkeypatch.setattr(
        "cleaner.cluster_list.open",
        lambda *args, **kwargs: _FailingFile([f"{VALID}\n", "bad\n"]),
        raising=False,
    )

    with pytest.raises(ClusterListReadException) as exc_info:
        read_cluster_list(path)

    assert exc_info.value.clusters == [VALID]
    assert exc_info.value.improper_count == 1
    assert isinstance(exc_info.value.__cause__, OSError)


def test_invalid_entries_are_logged(tmp_path, log_messages):
    path = _write(tmp_path, f"{VALID}\nnot-a-uuid\n".encode())

    read_cluster_list(path)

    assert f"Proper cluster ID: {VALID}" in log_messages
    assert "Not a proper cluster ID: 'not-a-uuid'" in log_messages


def test_written_list_is_readable(tmp_path):
    other = "b0c2d108-f0b4-4b6c-9f5a-8b3a7f3cbe1e"
    path = str(tmp_path / "out.txt")

    written = write_cluster_list(path, [VALID, other])

    assert written == 2
    assert read_cluster_list(path) == ([VALID, other], 0)
