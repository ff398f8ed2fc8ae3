import pytest
from botocore.exceptions import ClientError

from services.errors import StorageError
from services.file_manager import (
    LocalTranscriptStore,
    S3TranscriptStore,
    sanitize_filename,
    transcript_key,
)


def test_sanitize_filename_strips_path_and_reserved_characters():
    assert sanitize_filename('a/b\\c:d*e?"f<g>h|i') == "abcdefghi"
    assert sanitize_filename("  My   Show  ") == "My_Show"
    assert sanitize_filename("...") == "untitled"


def test_sanitize_filename_keeps_unicode():
    assert sanitize_filename("ポッドキャスト 第1回") == "ポッドキャスト_第1回"


def test_transcript_key_is_deterministic():
    assert transcript_key("Show", "Ep 1") == transcript_key("Show", "Ep 1")


def test_transcript_key_layout():
    key = transcript_key("My Show", "Ep/1: Pilot")
    prefix, channel, name = key.split("/")

    assert prefix == "transcriptions"
    assert channel == "My_Show"
    assert name.startswith("Ep1_Pilot-")
    assert name.endswith(".txt")


def test_transcript_key_distinguishes_titles_that_sanitize_alike():
    assert transcript_key("Show", "Ep/1") != transcript_key("Show", "Ep1")
    # naive concatenation would make these collide
    assert transcript_key("A_B", "C") != transcript_key("A", "B_C")


@pytest.mark.asyncio
async def test_local_store_writes_utf8_text(tmp_path):
    store = LocalTranscriptStore(tmp_path)
    key = transcript_key("Show", "Episode")

    location = await store.put_text(key, "こんにちは")

    assert location == str(tmp_path / key)
    assert (tmp_path / key).read_text(encoding="utf-8") == "こんにちは"


@pytest.mark.asyncio
async def test_local_store_overwrites_same_key(tmp_path):
    store = LocalTranscriptStore(tmp_path)
    key = transcript_key("Show", "Episode")

    await store.put_text(key, "first")
    await store.put_text(key, "second")

    assert (tmp_path / key).read_text(encoding="utf-8") == "second"


class FakeS3Client:
    def __init__(self, error=None):
        self.error = error
        self.calls = []

    def put_object(self, **kwargs):
        self.calls.append(kwargs)
        if self.error:
            raise self.error


@pytest.mark.asyncio
async def test_s3_store_puts_plain_text_object():
    client = FakeS3Client()
    store = S3TranscriptStore(bucket="transcriptions", client=client)

    location = await store.put_text("transcriptions/Show/Ep-abc.txt", "hello")

    assert location == "s3://transcriptions/transcriptions/Show/Ep-abc.txt"
    assert client.calls == [{
        "Bucket": "transcriptions",
        "Key": "transcriptions/Show/Ep-abc.txt",
        "Body": b"hello",
        "ContentType": "text/plain; charset=utf-8",
    }]


@pytest.mark.asyncio
async def test_s3_store_wraps_client_errors():
    error = ClientError({"Error": {"Code": "AccessDenied", "Message": "denied"}}, "PutObject")
    store = S3TranscriptStore(bucket="transcriptions", client=FakeS3Client(error=error))

    with pytest.raises(StorageError, match="AccessDenied"):
        await store.put_text("k.txt", "hello")
