import os
from dataclasses import dataclass, field, fields

BLENDS = ("literal", "convex")

ENV_PREFIX = "TIDEFISH_"


@dataclass
class Config:
    """
    Engine settings. Every tunable used by the search and the evaluation
    lives here so engines can be built side by side with different values.

    Attributes:
        - max_depth: deepest iteration the driver will start.
        - mate_score: score of a checkmated side to move (negated).
        - time_fraction: largest share of the remaining clock one move may use.
        - progression_offset: early-game floor added to the endgame progression
            when scaling the main search time allowance.
        - tempo_bonus: bonus for the side to move.
        - use_mobility: add the attacked-squares mobility term to evaluation.
        - blend: how middlegame and endgame table values are combined,
            "literal" (mg / progression + eg * progression) or
            "convex" (mg * (1 - progression) + eg * progression).
        - cache_size: maximum number of cached position scores, 0 disables.
        - root_best_first: search the previous iteration's best move first.
        - quiescence_ply_limit: quiescence plies after which a leaf is scored
            statically, keeping long check sequences within the recursion limit.
        - seed: seed for the fallback move picker, None for nondeterministic.
        - checkmate_threshold: scores beyond this magnitude are mate scores.
    """

    max_depth: int = 20
    mate_score: int = 10000
    time_fraction: float = 0.25
    progression_offset: float = 0.25
    tempo_bonus: int = 20
    use_mobility: bool = True
    blend: str = "literal"
    cache_size: int = 1 << 18
    root_best_first: bool = True
    quiescence_ply_limit: int = 64
    seed: int | None = None
    checkmate_threshold: int = field(default=-1)

    def __post_init__(self):
        if self.checkmate_threshold < 0:
            self.checkmate_threshold = self.mate_score - 1000

    def validate(self) -> "Config":
        if self.max_depth < 1:
            raise ValueError(f"max_depth must be positive, got {self.max_depth}")
        if not 0 < self.time_fraction <= 1:
            raise ValueError(
                f"time_fraction must be in (0, 1], got {self.time_fraction}"
            )
        if self.progression_offset < 0:
            raise ValueError(
                f"progression_offset must not be negative, got {self.progression_offset}"
            )
        if self.blend not in BLENDS:
            raise ValueError(f"unknown blend {self.blend!r}, expected one of {BLENDS}")
        if self.quiescence_ply_limit < 1:
            raise ValueError(
                f"quiescence_ply_limit must be positive, got {self.quiescence_ply_limit}"
            )
        if self.cache_size < 0:
            raise ValueError(f"cache_size must not be negative, got {self.cache_size}")
        if not 0 < self.checkmate_threshold < self.mate_score:
            raise ValueError(
                "checkmate_threshold must lie between 0 and mate_score, "
                f"got {self.checkmate_threshold}"
            )
        return self

    @classmethod
    def from_env(cls, environ=None, **overrides) -> "Config":
        """
        Build a config from TIDEFISH_* environment variables, e.g.
        TIDEFISH_MAX_DEPTH=6 or TIDEFISH_BLEND=convex. Keyword overrides
        win over the environment.
        """
        environ = os.environ if environ is None else environ
        values = {}
        for f in fields(cls):
            name = ENV_PREFIX + f.name.upper()
            if name not in environ:
                continue
            values[f.name] = _parse(name, environ[name], f.type)
        values.update(overrides)
        return cls(**values).validate()


def _parse(name: str, raw: str, kind) -> object:
    kind = str(kind)
    try:
        if "bool" in kind:
            lowered = raw.strip().lower()
            if lowered in ("1", "true", "yes", "on"):
                return True
            if lowered in ("0", "false", "no", "off"):
                return False
            raise ValueError(raw)
        if "int" in kind:
            if raw.strip().lower() in ("", "none") and "None" in kind:
                return None
            return int(raw)
        if "float" in kind:
            return float(raw)
    except ValueError:
        raise ValueError(f"invalid value for {name}: {raw!r}") from None
    return raw
