"""Configuration for cursor containers.

A container reads its CursorConfig when restoring tokens and when taking
native steps. The defaults match the permissive behaviour: foreign tokens are
accepted and structural changes during a pass are tolerated (deleted keys are
skipped, inserted keys wait for the next pass).
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class CursorConfig:
    """Per-container cursor behaviour."""

    # Reject tokens minted by a different container in set_iterator()
    strict_tokens: bool = False

    # Raise StructureChangedError if keys were added/removed mid-pass
    detect_modification: bool = False

    @classmethod
    def strict(cls) -> 'CursorConfig':
        """Create config that turns both contract checks on.

        Returns:
            CursorConfig with strict_tokens and detect_modification enabled
        """
        return cls(strict_tokens=True, detect_modification=True)

    @classmethod
    def permissive(cls) -> 'CursorConfig':
        """Create the default config with every check off."""
        return cls()
