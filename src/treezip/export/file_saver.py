"""
File saver for exported archives.

Writes archive bytes into the output directory with a progress bar.
"""

from pathlib import Path
from typing import Optional
from tqdm import tqdm
from treezip.constants import DEFAULT_OUTPUT_DIR, SAVE_CHUNK_SIZE
from treezip.errors import SaveError
from treezip.utils.console import info


class FileSaver:
    """Handles saving archives to local storage"""

    @staticmethod
    def resolve_target(filename: str, output_dir: Optional[str] = None) -> Path:
        """
        Build the destination path of an archive.

        Args:
            filename: Archive file name
            output_dir: Output directory, current directory when None

        Returns:
            Path to write the archive to
        """
        return Path(output_dir or DEFAULT_OUTPUT_DIR) / filename

    @staticmethod
    def write_with_progress(data: bytes, file_path: Path, filename: str) -> None:
        """
        Write bytes in chunks while updating a progress bar.

        Args:
            data: Archive bytes
            file_path: Destination path
            filename: Display filename
        """
        with open(file_path, "wb") as f, tqdm(
            total=len(data),
            desc=f"💾 Saving {filename}",
            unit="B",
            unit_scale=True,
            colour="green",
            ncols=100,
            leave=True,
        ) as pbar:
            for start in range(0, len(data), SAVE_CHUNK_SIZE):
                chunk = data[start:start + SAVE_CHUNK_SIZE]
                f.write(chunk)
                pbar.update(len(chunk))

    @staticmethod
    def save(data: bytes, filename: str, output_dir: Optional[str] = None) -> str:
        """
        Save an archive to local storage.

        Args:
            data: Serialized archive
            filename: Archive file name
            output_dir: Output directory

        Returns:
            Absolute path of the saved archive

        Raises:
            SaveError: If the directory or file cannot be written
        """
        file_path = FileSaver.resolve_target(filename, output_dir)
        try:
            file_path.parent.mkdir(parents=True, exist_ok=True)
            FileSaver.write_with_progress(data, file_path, filename)
        except OSError as e:
            raise SaveError(f"Failed to save {filename}: {e}") from e

        saved = file_path.resolve()
        info(f"📁 Exported to: {saved}")
        return str(saved)
