"""
Ingestion path: stream a multipart upload straight to the media directories,
then register the track in the catalog.

The request body is parsed incrementally, so per-file size limits and media
type checks are applied while bytes arrive instead of after the whole body
has been buffered. Files written by a request that ends up rejected are
deleted before the error propagates: a track row exists if and only if every
check and the insert succeeded.
"""

import logging
import re
import uuid
from collections.abc import AsyncIterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import IO, TYPE_CHECKING, Any

from python_multipart import MultipartParser
from python_multipart.exceptions import MultipartParseError
from python_multipart.multipart import parse_options_header
from sqlalchemy.orm import Session

from musicbox.core.errors import StoreError, ValidationError
from musicbox.core.gate import authorize_admin
from musicbox.models import Track
from musicbox.schemas.auth import Identity
from musicbox.services.catalog import add_track

if TYPE_CHECKING:
    from musicbox.core.config import Settings

logger = logging.getLogger(__name__)

# File form field -> required media type prefix.
FILE_FIELDS = {
    "music": "audio/",
    "cover": "image/",
}
TEXT_FIELDS = frozenset({"title", "artist", "duration"})
MAX_TEXT_FIELD_BYTES = 64 * 1024
# Allowance for boundaries, part headers and text fields when checking Content-Length.
MULTIPART_OVERHEAD_BYTES = 1024 * 1024
TITLE_MAX_LEN = 255
ARTIST_MAX_LEN = 255

_EXTENSION_RE = re.compile(r"^\.[A-Za-z0-9]{1,10}$")


def _safe_extension(original_name: str) -> str:
    """Original file extension if it is short and alphanumeric, else ''."""
    suffix = Path(original_name.replace("\\", "/")).suffix
    return suffix if _EXTENSION_RE.match(suffix) else ""


def _too_large_message(settings: "Settings") -> str:
    limit = settings.MAX_UPLOAD_BYTES
    if limit >= 1024 * 1024:
        return f"File too large (max {limit // (1024 * 1024)} MB)"
    return f"File too large (max {limit} bytes)"


@dataclass
class StoredFile:
    """A file part written to disk under a generated name."""

    field: str
    path: Path
    content_type: str
    original_name: str
    size: int = 0

    @property
    def filename(self) -> str:
        return self.path.name


@dataclass
class ReceivedUpload:
    """Text fields and stored files of one upload request."""

    fields: dict[str, str] = field(default_factory=dict)
    files: dict[str, StoredFile] = field(default_factory=dict)

    def discard(self) -> None:
        """Delete every file this upload wrote."""
        for stored in self.files.values():
            try:
                stored.path.unlink(missing_ok=True)
            except OSError:
                logger.exception("Could not remove rejected upload file %s", stored.path)


class _UploadReceiver:
    """python-multipart callbacks that route parts to files or text buffers."""

    def __init__(self, settings: "Settings") -> None:
        self._settings = settings
        self.upload = ReceivedUpload()
        self._header_name = b""
        self._header_value = b""
        self._headers: dict[bytes, bytes] = {}
        self._field_name: str | None = None
        self._text: bytearray | None = None
        self._current: StoredFile | None = None
        self._handle: IO[bytes] | None = None
        self._in_part = False

    def callbacks(self) -> dict[str, Any]:
        return {
            "on_part_begin": self.on_part_begin,
            "on_part_data": self.on_part_data,
            "on_part_end": self.on_part_end,
            "on_header_field": self.on_header_field,
            "on_header_value": self.on_header_value,
            "on_header_end": self.on_header_end,
            "on_headers_finished": self.on_headers_finished,
        }

    def on_part_begin(self) -> None:
        self._in_part = True
        self._headers = {}
        self._field_name = None
        self._text = None
        self._current = None

    def on_header_field(self, data: bytes, start: int, end: int) -> None:
        self._header_name += data[start:end]

    def on_header_value(self, data: bytes, start: int, end: int) -> None:
        self._header_value += data[start:end]

    def on_header_end(self) -> None:
        self._headers[self._header_name.lower()] = self._header_value
        self._header_name = b""
        self._header_value = b""

    def on_headers_finished(self) -> None:
        _, options = parse_options_header(self._headers.get(b"content-disposition", b""))
        name = options.get(b"name", b"").decode("utf-8", "replace")
        if b"filename" not in options:
            self._field_name = name
            self._text = bytearray()
            return
        original_name = options[b"filename"].decode("utf-8", "replace")
        if not original_name:
            # Browsers send an empty, nameless part for an unselected file input.
            return
        content_type = (
            self._headers.get(b"content-type", b"application/octet-stream")
            .decode("latin-1")
            .split(";")[0]
            .strip()
            .lower()
        )
        self._open_file(name, original_name, content_type)

    def _open_file(self, field_name: str, original_name: str, content_type: str) -> None:
        required_prefix = FILE_FIELDS.get(field_name)
        if required_prefix is None:
            raise ValidationError(f"Unexpected field: {field_name}")
        if field_name in self.upload.files:
            raise ValidationError(f"Only one {field_name} file is allowed")
        if not content_type.startswith(required_prefix):
            kind = "audio" if field_name == "music" else "image"
            raise ValidationError(f"Only {kind} files are allowed for {field_name}")

        directory = (
            self._settings.music_dir if field_name == "music" else self._settings.covers_dir
        )
        path = directory / f"{uuid.uuid4().hex}{_safe_extension(original_name)}"
        stored = StoredFile(
            field=field_name,
            path=path,
            content_type=content_type,
            original_name=original_name,
        )
        self._handle = path.open("xb")
        self.upload.files[field_name] = stored
        self._current = stored

    def on_part_data(self, data: bytes, start: int, end: int) -> None:
        chunk = data[start:end]
        if self._current is not None and self._handle is not None:
            self._current.size += len(chunk)
            if self._current.size > self._settings.MAX_UPLOAD_BYTES:
                raise ValidationError(_too_large_message(self._settings))
            self._handle.write(chunk)
        elif self._text is not None:
            if len(self._text) + len(chunk) > MAX_TEXT_FIELD_BYTES:
                raise ValidationError(f"Form field '{self._field_name}' is too large")
            self._text.extend(chunk)

    def on_part_end(self) -> None:
        self._in_part = False
        if self._handle is not None:
            self._handle.close()
            self._handle = None
            self._current = None
        elif self._text is not None and self._field_name in TEXT_FIELDS:
            self.upload.fields[self._field_name] = self._text.decode("utf-8", "replace")
        self._text = None

    def finish(self) -> None:
        if self._in_part:
            raise ValidationError("Malformed multipart body")

    def abort(self) -> None:
        if self._handle is not None:
            self._handle.close()
            self._handle = None
        self.upload.discard()


async def receive_upload(
    content_type: str | None,
    content_length: str | None,
    body: AsyncIterator[bytes],
    settings: "Settings",
) -> ReceivedUpload:
    """
    Parse a multipart/form-data body chunk by chunk, writing file parts to disk.

    Raises ValidationError for a non-multipart body, a body that cannot fit the
    per-file limits, a disallowed media type, an oversized file, or malformed
    multipart framing. Files already written are removed before raising.
    """
    mime, params = parse_options_header(content_type or "")
    boundary = params.get(b"boundary")
    if mime.lower() != b"multipart/form-data" or not boundary:
        raise ValidationError("Content-Type must be multipart/form-data")

    if content_length:
        try:
            declared = int(content_length)
        except ValueError as e:
            raise ValidationError("Invalid Content-Length") from e
        if declared > len(FILE_FIELDS) * settings.MAX_UPLOAD_BYTES + MULTIPART_OVERHEAD_BYTES:
            raise ValidationError(_too_large_message(settings))

    receiver = _UploadReceiver(settings)
    parser = MultipartParser(boundary, receiver.callbacks())
    try:
        async for chunk in body:
            parser.write(chunk)
        parser.finalize()
        receiver.finish()
    except MultipartParseError as e:
        receiver.abort()
        raise ValidationError("Malformed multipart body") from e
    except BaseException:
        # Includes client disconnects and cancellation: never leave partial files.
        receiver.abort()
        raise
    return receiver.upload


def _parse_duration(raw: str | None) -> int:
    if raw is None or not raw.strip():
        return 0
    try:
        value = int(raw.strip())
    except ValueError as e:
        raise ValidationError("Duration must be a whole number of seconds") from e
    if value < 0:
        raise ValidationError("Duration must not be negative")
    return value


def register_track(
    db: Session,
    caller: Identity,
    upload: ReceivedUpload,
) -> Track:
    """
    Validate the received fields and insert the catalog row.

    On any failure the upload's files are deleted and the error is re-raised.
    """
    try:
        title = upload.fields.get("title", "").strip()
        artist = upload.fields.get("artist", "").strip()
        music = upload.files.get("music")
        if not title or not artist or music is None:
            raise ValidationError("Missing required fields")
        if len(title) > TITLE_MAX_LEN or len(artist) > ARTIST_MAX_LEN:
            raise ValidationError(
                f"Title and artist must be at most {TITLE_MAX_LEN} characters"
            )
        duration = _parse_duration(upload.fields.get("duration"))
        cover = upload.files.get("cover")
        return add_track(
            db,
            track_id=str(uuid.uuid4()),
            title=title,
            artist=artist,
            audio_filename=music.filename,
            cover_filename=cover.filename if cover else None,
            duration_seconds=duration,
            uploaded_by=caller.id,
        )
    except (ValidationError, StoreError):
        upload.discard()
        raise


async def ingest_upload(
    db: Session,
    caller: Identity,
    content_type: str | None,
    content_length: str | None,
    body: AsyncIterator[bytes],
    settings: "Settings",
) -> Track:
    """Admin-only: receive an upload and register it as a new track."""
    authorize_admin(caller)
    try:
        upload = await receive_upload(content_type, content_length, body, settings)
    except ValidationError as e:
        logger.info("Rejected upload from user id=%s: %s", caller.id, e.message)
        raise
    try:
        track = register_track(db, caller, upload)
    except ValidationError as e:
        logger.info("Rejected upload from user id=%s: %s", caller.id, e.message)
        raise
    music = upload.files["music"]
    cover = upload.files.get("cover")
    logger.info(
        "Stored track id=%s by user id=%s audio_bytes=%s cover_bytes=%s",
        track.id,
        caller.id,
        music.size,
        cover.size if cover else 0,
    )
    return track
