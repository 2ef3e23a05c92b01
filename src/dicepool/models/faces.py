from typing import Any, Dict, Iterable, List, Mapping

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from src.dicepool.exceptions import FaceTableError
from src.dicepool.models.symbols import Face, SymbolKind

FACES_PER_DIE = 8

# Colors shipped with the game. Attack dice roll mostly hits, the rest roll blocks.
ATTACK_COLORS = ("RED", "ORANGE", "YELLOW")
DEFENCE_COLORS = ("GREEN", "BLUE", "BLACK")
STANDARD_COLORS = ATTACK_COLORS + DEFENCE_COLORS


def normalize_color(color: str) -> str:
    """Canonical face-table key for a free-form color name ('Red' -> 'RED')."""
    return str(color).strip().upper()


def is_attack_color(color: str) -> bool:
    return normalize_color(color) in ATTACK_COLORS


def parse_face(raw: Any) -> Face:
    """
    Accepts either a list of symbol tags (['HIT', 'HIT']) or a mapping of
    symbol name to count ({'HIT': 2, 'SPECIAL': 0}) and returns the face as
    a tuple of SymbolKind occurrences.
    """
    if isinstance(raw, Mapping):
        symbols: List[SymbolKind] = []
        for name, count in raw.items():
            count = int(count or 0)
            if count < 0:
                raise ValueError(f"Negative count {count} for symbol {name!r}")
            symbols.extend([SymbolKind.parse(name)] * count)
        return tuple(symbols)
    if isinstance(raw, (list, tuple)):
        return tuple(SymbolKind.parse(name) for name in raw)
    raise ValueError(f"Face must be a list of symbols or a symbol->count mapping, got {type(raw).__name__}")


class FaceTable(BaseModel):
    """
    Read-only table of die faces: for every color, exactly 8 faces.
    Validated once when loaded; rolling code assumes the invariant holds.
    """
    model_config = ConfigDict(frozen=True)

    faces: Dict[str, tuple[Face, ...]]

    @field_validator("faces", mode="before")
    @classmethod
    def normalize_faces(cls, value: Any) -> Dict[str, tuple[Face, ...]]:
        if not isinstance(value, Mapping):
            raise ValueError("Face table must map color -> list of faces")

        table: Dict[str, tuple[Face, ...]] = {}
        for color, raw_faces in value.items():
            key = normalize_color(color)
            if not isinstance(raw_faces, (list, tuple)) or len(raw_faces) != FACES_PER_DIE:
                found = len(raw_faces) if isinstance(raw_faces, (list, tuple)) else type(raw_faces).__name__
                raise ValueError(f"Die {key} must have exactly {FACES_PER_DIE} faces (found {found})")
            parsed = []
            for idx, raw_face in enumerate(raw_faces):
                try:
                    parsed.append(parse_face(raw_face))
                except ValueError as e:
                    raise ValueError(f"Die {key} face {idx}: {e}") from e
            table[key] = tuple(parsed)
        return table

    @classmethod
    def from_mapping(
        cls,
        data: Mapping[str, Any],
        required_colors: Iterable[str] | None = None,
    ) -> "FaceTable":
        """
        Validates a raw {color: faces} mapping.

        Raises:
            FaceTableError: If any color has a face count other than 8, a face
                holds an unknown symbol or a negative count, or a required
                color is missing.
        """
        try:
            table = cls(faces=data)
        except ValidationError as e:
            raise FaceTableError(f"Invalid face table: {e}") from e

        for color in required_colors or ():
            if normalize_color(color) not in table.faces:
                raise FaceTableError(f"Missing dice color: {normalize_color(color)}")
        return table

    def get(self, color: str) -> tuple[Face, ...] | None:
        """Faces for a color, or None when the table has no such die."""
        return self.faces.get(normalize_color(color))

    def __contains__(self, color: str) -> bool:
        return normalize_color(color) in self.faces

    @property
    def colors(self) -> List[str]:
        return list(self.faces)

    def to_dict(self) -> Dict[str, List[List[str]]]:
        """JSON-friendly form using symbol tags."""
        return {
            color: [[symbol.value for symbol in face] for face in faces]
            for color, faces in self.faces.items()
        }
