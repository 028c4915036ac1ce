"""Checkpoint and done-marker sidecars for wiki dump loading."""
import hashlib
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ValidationError

from utils.logger import setup_logger

logger = setup_logger(__name__)

CHECKSUM_BLOCK_SIZE = 1024 * 1024


class CheckpointError(IOError):
    """Raised when an existing checkpoint cannot be read."""
    pass


class StaleCheckpointError(Exception):
    """Raised when the dump changed since the checkpoint was written."""
    pass


class Checkpoint(BaseModel):
    """Resume state of a partially processed dump."""
    created_at: datetime
    dump_checksum: str
    last_page_title: str  # Page being processed when the run failed


class CheckpointStore:
    """Manages the ``.checkpoint`` and ``.done`` sidecars of one dump file."""

    def __init__(self, dump_path: Path):
        """Initialize checkpoint store.

        Args:
            dump_path: Path to the wiki dump file the sidecars belong to
        """
        self.dump_path = Path(dump_path).resolve()
        self.checkpoint_file = self.dump_path.with_name(self.dump_path.name + ".checkpoint")
        self.done_file = self.dump_path.with_name(self.dump_path.name + ".done")

    def exists(self) -> bool:
        """Check if checkpoint exists."""
        return self.checkpoint_file.exists()

    def load(self) -> Optional[Checkpoint]:
        """Load checkpoint if exists.

        Returns:
            Checkpoint or None if there is no checkpoint

        Raises:
            CheckpointError: If the checkpoint exists but cannot be read
        """
        if not self.checkpoint_file.exists():
            return None

        try:
            checkpoint = Checkpoint.model_validate_json(
                self.checkpoint_file.read_text(encoding="utf-8")
            )
        except (OSError, ValidationError) as e:
            raise CheckpointError(f"Failed to load checkpoint {self.checkpoint_file}: {e}") from e

        logger.info(f"✓ Checkpoint loaded: last page '{checkpoint.last_page_title}'")
        return checkpoint

    def save(self, checkpoint: Checkpoint) -> None:
        """Save checkpoint. Failures are logged, never raised.

        Args:
            checkpoint: Resume state to persist
        """
        try:
            self.checkpoint_file.write_text(
                checkpoint.model_dump_json(indent=2),
                encoding="utf-8"
            )
            logger.info(f"✓ Checkpoint saved: last page '{checkpoint.last_page_title}'")
        except Exception as e:
            logger.error(f"Failed to save checkpoint {self.checkpoint_file}: {e}")

    def create(self, last_page_title: str, dump_checksum: Optional[str] = None) -> Checkpoint:
        """Build a fresh checkpoint for the current dump content.

        Args:
            last_page_title: Title of the page being processed
            dump_checksum: Already computed checksum (computed when omitted)

        Returns:
            Checkpoint stamped with the current time and checksum
        """
        return Checkpoint(
            created_at=datetime.now(timezone.utc),
            dump_checksum=dump_checksum or self.compute_checksum(),
            last_page_title=last_page_title
        )

    def delete(self) -> None:
        """Delete checkpoint file. Failures are logged, never raised."""
        if not self.checkpoint_file.exists():
            return

        try:
            self.checkpoint_file.unlink()
            logger.info(f"Checkpoint {self.checkpoint_file.name} removed")
        except Exception as e:
            logger.error(f"Failed to remove checkpoint {self.checkpoint_file}: {e}")

    def verify(self, checkpoint: Checkpoint) -> None:
        """Make sure the dump is unchanged since the checkpoint was written.

        Args:
            checkpoint: Loaded checkpoint

        Raises:
            StaleCheckpointError: If the checksums differ
        """
        current = self.compute_checksum()
        if current != checkpoint.dump_checksum:
            raise StaleCheckpointError(
                f"Checksum of {self.dump_path} does not match the checkpoint, "
                f"the file changed since the last run. Remove {self.checkpoint_file} "
                f"and start over."
            )

    def is_done(self) -> bool:
        """Check if the dump was already fully processed."""
        return self.done_file.exists()

    def mark_done(self) -> None:
        """Create the done marker. Failures are logged, never raised."""
        try:
            self.done_file.touch()
            logger.info(f"Dump marked as processed ({self.done_file.name})")
        except Exception as e:
            logger.error(f"Failed to mark {self.dump_path} as processed: {e}")

    def compute_checksum(self) -> str:
        """Hash the whole dump file for change detection.

        Returns:
            Hex digest of the file content
        """
        hasher = hashlib.blake2b()
        with open(self.dump_path, "rb") as f:
            for block in iter(lambda: f.read(CHECKSUM_BLOCK_SIZE), b""):
                hasher.update(block)
        return hasher.hexdigest()
