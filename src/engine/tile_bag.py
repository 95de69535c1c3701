import random
from typing import Iterable, List, Optional
from pydantic import BaseModel, Field, ConfigDict

from ..verifiers.tiles import Tile


class TileBag(BaseModel):
    """
    The shared pool of undrawn letter tiles.

    Draws pick a uniformly random index each time, so the pool never needs
    shuffling. The random source can be injected for reproducible games.

    Attributes:
        tiles: The tiles still in the bag
        seed: Optional random seed for reproducibility
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    tiles: List[Tile] = Field(default_factory=list)
    seed: Optional[int] = None
    _rng: random.Random = None

    def model_post_init(self, __context) -> None:
        """Initialize the random generator after model creation."""
        self._rng = random.Random(self.seed)

    @classmethod
    def create(
        cls,
        tiles: Iterable[Tile],
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
    ) -> "TileBag":
        """
        Factory method to create a bag over ``tiles``.

        Args:
            tiles: The initial pool
            seed: Seed for a private generator
            rng: A shared generator to use instead of a seeded one

        Returns:
            A new TileBag
        """
        bag = cls(tiles=list(tiles), seed=seed)
        if rng is not None:
            bag._rng = rng
        return bag

    def remaining(self) -> int:
        """Number of tiles left in the bag."""
        return len(self.tiles)

    def is_empty(self) -> bool:
        return not self.tiles

    def draw(self) -> Optional[Tile]:
        """
        Remove and return a random tile.

        Returns:
            The drawn tile, or None once the bag is exhausted
        """
        if not self.tiles:
            return None
        index = self._rng.randrange(len(self.tiles))
        return self.tiles.pop(index)

    def put(self, tile: Tile) -> None:
        """Return a tile to the bag so it can be drawn again."""
        tile.unplace()
        self.tiles.append(tile)

    def get_state(self) -> dict:
        return {
            "tiles_remaining": self.remaining(),
        }
