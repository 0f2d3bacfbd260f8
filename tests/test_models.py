"""Tests for the commit model and snapshot hashing."""

import hashlib

from svcs.core.hashing import snapshot_hash
from svcs.models.commit import Commit


def test_snapshot_hash_matches_sha1_of_concatenation():
    """Test that buffers are hashed as one concatenated stream."""
    expected = hashlib.sha1(b"hello world").hexdigest()

    assert snapshot_hash([b"hello", b" ", b"world"]) == expected
    assert snapshot_hash([b"hello world"]) == expected


def test_snapshot_hash_empty():
    """Test hashing no content at all."""
    assert snapshot_hash([]) == "da39a3ee5e6b4b0d3255bfef95601890afd80709"


def test_log_record_format():
    """Test the four-line record written to the log."""
    commit = Commit(id="abc123", author="John", message="Initial")

    assert commit.to_log_record() == "Initial\nAuthor: John\ncommit abc123\n\n"
    assert commit.to_lines() == ["Initial", "Author: John", "commit abc123", ""]


def test_parse_log():
    """Test parsing several records back in file order."""
    text = (
        "first\nAuthor: John\ncommit aaa\n\n"
        "second\nAuthor: Unknown\ncommit bbb\n\n"
    )

    commits = Commit.parse_log(text)

    assert commits == [
        Commit(id="aaa", author="John", message="first"),
        Commit(id="bbb", author="Unknown", message="second"),
    ]


def test_parse_log_multiline_and_empty_messages():
    """Test records whose message is empty or spans lines."""
    records = [
        Commit(id="aaa", author="John", message=""),
        Commit(id="bbb", author="John", message="fix\ncommit message body"),
    ]
    text = "".join(c.to_log_record() for c in records)

    assert Commit.parse_log(text) == records


def test_parse_log_empty():
    assert Commit.parse_log("") == []
