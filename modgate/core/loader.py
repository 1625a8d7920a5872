"""Mod manifest discovery for modgate.

Scans a mods directory for ``<mod>/Definition.json`` manifests and turns
them into descriptors for the resolver. A broken mod never aborts the scan:
directories without a manifest, unparsable manifests and duplicate
identifiers are logged, recorded in :attr:`ModDefinitionLoader.issues`, and
skipped.

Typical usage::

    loader = ModDefinitionLoader(Path("Mods"))
    descriptors = loader.load()
    result = resolve(descriptors)
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Dict, List, Union

from modgate.utils.logger import get_logger
from modgate.constants import DEFAULT_DEFINITION_FILE
from modgate.models.descriptor import ModDescriptor
from modgate.core.manifest import descriptor_from_manifest
from modgate.exceptions import FileOperationError, ManifestError
from modgate.utils.filesystem import list_subdirectories, safe_read_file

logger = get_logger("loader")

__all__ = ["ModDefinitionLoader"]


class ModDefinitionLoader:
    """Loads mod descriptors from a directory of mod folders.

    Args:
        mods_dir: Directory whose subdirectories each hold one mod.
        definition_file: Manifest file name inside each mod directory.

    Attributes:
        issues: Human-readable reasons for every skipped directory from the
            most recent :meth:`load` call.
    """

    def __init__(
        self,
        mods_dir: Union[str, Path],
        definition_file: str = DEFAULT_DEFINITION_FILE,
    ) -> None:
        self.mods_dir = Path(mods_dir)
        self.definition_file = definition_file
        self.issues: List[str] = []

    def load(self) -> List[ModDescriptor]:
        """Load every valid manifest below :attr:`mods_dir`.

        Returns:
            Descriptors in directory-name order, unique by identifier
            (case-insensitive; the first one found wins).

        Raises:
            FileOperationError: :attr:`mods_dir` does not exist.
        """
        self.issues = []
        loaded: Dict[str, ModDescriptor] = {}

        for directory in list_subdirectories(self.mods_dir):
            manifest = directory / self.definition_file
            if not manifest.is_file():
                self._skip(
                    f"Not loading directory {directory}: missing {self.definition_file}.",
                    warning=True,
                )
                continue

            logger.info("Loading definition from %s ...", directory)
            try:
                descriptor = self._load_manifest(manifest, directory)
            except json.JSONDecodeError as exc:
                self._skip(f"Failed to parse definition JSON in {manifest}: {exc}")
                continue
            except (ManifestError, FileOperationError) as exc:
                self._skip(f"Invalid definition in {manifest}: {exc}")
                continue

            existing = loaded.get(descriptor.key)
            if existing is not None:
                self._skip(
                    f"Another mod with identifier '{descriptor.identifier}' was "
                    f"already loaded from '{existing.base_path}'; skipping '{directory}'."
                )
                continue

            loaded[descriptor.key] = descriptor

        logger.info(
            "Loaded %d mod definition(s) from %s (%d skipped)",
            len(loaded),
            self.mods_dir,
            len(self.issues),
        )
        return list(loaded.values())

    @staticmethod
    def _load_manifest(manifest: Path, directory: Path) -> ModDescriptor:
        data = json.loads(safe_read_file(manifest))
        try:
            return descriptor_from_manifest(data, base_path=directory)
        except ManifestError as exc:
            exc.file_path = str(manifest)
            exc.details["file"] = str(manifest)
            raise

    def _skip(self, message: str, *, warning: bool = False) -> None:
        self.issues.append(message)
        if warning:
            logger.warning(message)
        else:
            logger.error(message)
