"""Tests for artifact naming, persistence and listing."""

import os
import re
from concurrent.futures import ThreadPoolExecutor
from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest

from api.exceptions import ArtifactPersistError
from reporting.artifacts.medium import (
    InMemoryArtifactMedium,
    LocalArtifactMedium,
    validate_name,
)
from reporting.artifacts.store import Artifact, ArtifactStore, epoch_millis, sort_newest_first
from tests.fixtures import SteppingClock

NAME_PATTERN = re.compile(r"^report-(.+)-(\d+)\.pdf$")
MOMENT = datetime(2025, 1, 1, 12, 0, tzinfo=UTC)


class TestNaming:
    """Tests for artifact filenames."""

    def test_name_pattern(self) -> None:
        """Test names follow report-<session>-<epoch ms>.<ext>."""
        store = ArtifactStore(InMemoryArtifactMedium())
        name = store.name_artifact("session_001", MOMENT)

        match = NAME_PATTERN.match(name)
        assert match is not None
        assert match.group(1) == "session_001"
        assert int(match.group(2)) == 1735732800000

    def test_extension(self) -> None:
        """Test the configured extension is used."""
        store = ArtifactStore(InMemoryArtifactMedium(), extension=".html")
        assert store.name_artifact("s", MOMENT).endswith(".html")

    def test_distinct_milliseconds_distinct_names(self) -> None:
        """Test names one millisecond apart differ."""
        store = ArtifactStore(InMemoryArtifactMedium())
        first = store.name_artifact("s", MOMENT)
        second = store.name_artifact("s", MOMENT + timedelta(milliseconds=1))
        assert first != second

    def test_epoch_millis(self) -> None:
        """Test epoch millisecond conversion."""
        assert epoch_millis(datetime(1970, 1, 1, tzinfo=UTC)) == 0
        assert epoch_millis(datetime(1970, 1, 1, 0, 0, 1, 500000, tzinfo=UTC)) == 1500


class TestPersist:
    """Tests for create-only persistence."""

    def test_persist_local(self, tmp_path: Path) -> None:
        """Test bytes are written and the artifact is returned."""
        store = ArtifactStore(LocalArtifactMedium(tmp_path / "out"))
        artifact = store.persist("report-s1-1.pdf", b"%PDF-1.4")

        assert artifact.filename == "report-s1-1.pdf"
        assert Path(artifact.path).read_bytes() == b"%PDF-1.4"
        assert artifact.created_at.tzinfo is not None

    def test_directory_created_on_first_write(self, tmp_path: Path) -> None:
        """Test the base directory is created lazily."""
        base = tmp_path / "nested" / "dir"
        ArtifactStore(LocalArtifactMedium(base)).persist("report-s1-1.pdf", b"x")
        assert base.is_dir()

    def test_duplicate_rejected_and_original_kept(self, tmp_path: Path) -> None:
        """Test an existing name is never overwritten."""
        store = ArtifactStore(LocalArtifactMedium(tmp_path))
        store.persist("report-s1-1.pdf", b"first")

        with pytest.raises(ArtifactPersistError) as exc_info:
            store.persist("report-s1-1.pdf", b"second")

        assert exc_info.value.code == "artifact_persist_failed"
        assert exc_info.value.details == {"filename": "report-s1-1.pdf"}
        assert (tmp_path / "report-s1-1.pdf").read_bytes() == b"first"

    def test_duplicate_rejected_in_memory(self) -> None:
        """Test the in-memory medium is also create-only."""
        store = ArtifactStore(InMemoryArtifactMedium(clock=SteppingClock()))
        first = store.persist("report-s1-1.pdf", b"first")

        with pytest.raises(ArtifactPersistError):
            store.persist("report-s1-1.pdf", b"second")
        assert store.list() == [first]

    @pytest.mark.parametrize("name", ["", ".hidden", "../escape.pdf", "a/b.pdf", "a\\b.pdf"])
    def test_invalid_names(self, tmp_path: Path, name: str) -> None:
        """Test names that could escape the directory are rejected."""
        store = ArtifactStore(LocalArtifactMedium(tmp_path))
        with pytest.raises(ArtifactPersistError):
            store.persist(name, b"x")

    def test_no_temp_files_left(self, tmp_path: Path) -> None:
        """Test the temp file used for the atomic write is removed."""
        store = ArtifactStore(LocalArtifactMedium(tmp_path))
        store.persist("report-s1-1.pdf", b"x")
        with pytest.raises(ArtifactPersistError):
            store.persist("report-s1-1.pdf", b"y")

        assert sorted(p.name for p in tmp_path.iterdir()) == ["report-s1-1.pdf"]

    def test_write_failure_maps_to_persist_error(self, tmp_path: Path) -> None:
        """Test filesystem errors surface as ArtifactPersistError."""
        blocker = tmp_path / "file"
        blocker.write_text("not a directory")
        store = ArtifactStore(LocalArtifactMedium(blocker / "sub"))

        with pytest.raises(ArtifactPersistError):
            store.persist("report-s1-1.pdf", b"x")


class TestListing:
    """Tests for listing artifacts."""

    def test_missing_directory_is_empty(self, tmp_path: Path) -> None:
        """Test a store that was never written lists nothing."""
        assert ArtifactStore(LocalArtifactMedium(tmp_path / "absent")).list() == []

    def test_empty_directory_is_empty(self, tmp_path: Path) -> None:
        """Test an empty directory lists nothing."""
        assert ArtifactStore(LocalArtifactMedium(tmp_path)).list() == []

    def test_newest_first_in_memory(self) -> None:
        """Test listing orders by creation time descending."""
        store = ArtifactStore(InMemoryArtifactMedium(clock=SteppingClock()))
        for name in ["report-a-1.pdf", "report-b-2.pdf", "report-c-3.pdf"]:
            store.persist(name, b"x")

        assert [a.filename for a in store.list()] == [
            "report-c-3.pdf",
            "report-b-2.pdf",
            "report-a-1.pdf",
        ]

    def test_newest_first_local(self, tmp_path: Path) -> None:
        """Test local listing uses file modification times."""
        store = ArtifactStore(LocalArtifactMedium(tmp_path))
        store.persist("report-new-1.pdf", b"x")
        store.persist("report-old-2.pdf", b"x")

        old = MOMENT.timestamp()
        os.utime(tmp_path / "report-old-2.pdf", (old, old))
        os.utime(tmp_path / "report-new-1.pdf", (old + 60, old + 60))

        listed = store.list()
        assert [a.filename for a in listed] == ["report-new-1.pdf", "report-old-2.pdf"]
        assert listed[1].created_at == MOMENT

    def test_hidden_and_directories_skipped(self, tmp_path: Path) -> None:
        """Test temp files, dotfiles and subdirectories are not artifacts."""
        store = ArtifactStore(LocalArtifactMedium(tmp_path))
        store.persist("report-s1-1.pdf", b"x")
        (tmp_path / ".tmp-abc").write_bytes(b"partial")
        (tmp_path / "subdir").mkdir()

        assert [a.filename for a in store.list()] == ["report-s1-1.pdf"]

    def test_tie_broken_by_filename(self) -> None:
        """Test equal timestamps order by filename descending."""
        artifacts = [
            Artifact("report-a-1.pdf", "a", MOMENT),
            Artifact("report-c-1.pdf", "c", MOMENT),
            Artifact("report-b-1.pdf", "b", MOMENT),
        ]
        assert [a.filename for a in sort_newest_first(artifacts)] == [
            "report-c-1.pdf",
            "report-b-1.pdf",
            "report-a-1.pdf",
        ]

    def test_listing_is_deterministic(self) -> None:
        """Test repeated listings without writes are identical."""
        store = ArtifactStore(InMemoryArtifactMedium(clock=lambda: MOMENT))
        for name in ["report-b-1.pdf", "report-a-1.pdf"]:
            store.persist(name, b"x")
        assert store.list() == store.list()

    def test_locate(self) -> None:
        """Test locating a single artifact."""
        store = ArtifactStore(InMemoryArtifactMedium(clock=lambda: MOMENT))
        store.persist("report-s1-1.pdf", b"x")

        found = store.locate("report-s1-1.pdf")
        assert found == Artifact("report-s1-1.pdf", "memory://report-s1-1.pdf", MOMENT)
        assert store.locate("report-missing.pdf") is None

    def test_to_dict(self) -> None:
        """Test artifact serialization."""
        artifact = Artifact("report-s1-1.pdf", "/tmp/report-s1-1.pdf", MOMENT)
        assert artifact.to_dict() == {
            "filename": "report-s1-1.pdf",
            "path": "/tmp/report-s1-1.pdf",
            "created_at": MOMENT.isoformat(),
        }


class CountingMedium(InMemoryArtifactMedium):
    """In-memory medium that counts full listings."""

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.list_calls = 0

    def list(self):
        self.list_calls += 1
        return super().list()


class TestLookup:
    """Tests for single-artifact lookups."""

    def test_persist_and_locate_do_not_list(self) -> None:
        """Test writing and locating one artifact never scans the whole store."""
        medium = CountingMedium(clock=lambda: MOMENT)
        store = ArtifactStore(medium)
        for i in range(5):
            store.persist(f"report-s{i}-{i}.pdf", b"x")

        assert store.locate("report-s3-3.pdf") == Artifact(
            "report-s3-3.pdf", "memory://report-s3-3.pdf", MOMENT
        )
        assert medium.list_calls == 0

    def test_created_at_local(self, tmp_path: Path) -> None:
        """Test the local medium reports modification time for one file."""
        medium = LocalArtifactMedium(tmp_path)
        medium.write("report-s1-1.pdf", b"x")
        os.utime(tmp_path / "report-s1-1.pdf", (MOMENT.timestamp(), MOMENT.timestamp()))
        (tmp_path / "subdir").mkdir()

        assert medium.created_at("report-s1-1.pdf") == MOMENT
        assert medium.created_at("report-missing.pdf") is None
        assert medium.created_at("subdir") is None

    def test_locate_invalid_name(self, tmp_path: Path) -> None:
        """Test unsafe names are simply not found."""
        store = ArtifactStore(LocalArtifactMedium(tmp_path))
        assert store.locate("../etc/passwd") is None
        assert store.locate(".hidden") is None


class TestConcurrentAccess:
    """Tests for listing while other threads write."""

    def test_listing_never_sees_partial_files(self, tmp_path: Path) -> None:
        """Test every listed artifact is complete while writes are in flight."""
        writers = 40
        payload = b"%" * (64 * 1024)
        store = ArtifactStore(LocalArtifactMedium(tmp_path))

        def write(i: int) -> None:
            store.persist(f"report-s{i}-{i}.pdf", payload)

        def snapshot() -> list[tuple[str, int]]:
            return [(a.filename, Path(a.path).stat().st_size) for a in store.list()]

        with ThreadPoolExecutor(max_workers=8) as pool:
            futures = []
            for i in range(writers):
                futures.append(pool.submit(write, i))
                futures.append(pool.submit(snapshot))
            results = [f.result() for f in futures]

        for listing in results:
            if listing is None:
                continue
            for filename, size in listing:
                assert not filename.startswith(".")
                assert NAME_PATTERN.match(filename)
                assert size == len(payload)

        assert len(store.list()) == writers
        assert not [p for p in tmp_path.iterdir() if p.name.startswith(".")]


class TestValidateName:
    """Tests for artifact name validation."""

    def test_valid(self) -> None:
        """Test ordinary names pass."""
        validate_name("report-session_001-1735732800000.pdf")

    @pytest.mark.parametrize("name", ["", ".x", "a/b", "a\x00b"])
    def test_invalid(self, name: str) -> None:
        """Test unsafe names are rejected."""
        with pytest.raises(ValueError):
            validate_name(name)
