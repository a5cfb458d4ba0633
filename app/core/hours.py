from typing import Iterable, List, Optional, Sequence
from app.core.config import settings
from app.schemas.day import HourBlock

class HourCatalogue:
    """
    Ordered catalogue of bookable hour-slot labels.

    Position in the catalogue is the only ordering used when a Day's
    hours are rendered or stored. Labels missing from the catalogue get
    position -1 and therefore sort ahead of every known label.
    """

    def __init__(self, labels: Sequence[str]):
        if not labels:
            raise ValueError("Hour catalogue cannot be empty")
        if len(set(labels)) != len(labels):
            raise ValueError("Hour catalogue labels must be unique")
        self._labels = list(labels)
        self._positions = {label: index for index, label in enumerate(self._labels)}

    @property
    def labels(self) -> List[str]:
        return list(self._labels)

    def __contains__(self, label: str) -> bool:
        return label in self._positions

    def __iter__(self):
        return iter(self._labels)

    def __len__(self) -> int:
        return len(self._labels)

    def position(self, label: str) -> int:
        return self._positions.get(label, -1)

    def sort(self, blocks: Iterable[HourBlock]) -> List[HourBlock]:
        """Stable sort by catalogue position."""
        return sorted(blocks, key=lambda block: self.position(block.hour))

    @staticmethod
    def title(label: str) -> str:
        """Leading part of a label, e.g. "4 Hours" for "4 Hours/$130"."""
        return label.split("/")[0].strip()

    def find(
        self,
        blocks: Iterable[HourBlock],
        label: str,
        legacy: bool = False
    ) -> Optional[HourBlock]:
        """
        Find the block for a label.

        Exact matches win. With legacy matching on, a block whose label
        contains the title of the requested label is accepted as well, which
        tolerates stored labels whose price suffix drifted.
        """
        blocks = list(blocks)
        for block in blocks:
            if block.hour == label:
                return block

        if legacy:
            title = self.title(label)
            if title:
                for block in blocks:
                    if title in block.hour:
                        return block

        return None

def get_hour_catalogue() -> HourCatalogue:
    return HourCatalogue(settings.HOUR_CATALOGUE)
