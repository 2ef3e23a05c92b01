# ============================================================
# DICE POOL EXCEPTIONS
# ============================================================

class DicePoolError(Exception):
    """Base exception for dice pool errors"""
    pass


class FaceTableError(DicePoolError):
    """Face table is malformed (wrong face count, unknown symbol) or could not be read"""
    pass


class PipelineConfigError(DicePoolError):
    """A serialized pipeline step failed validation"""
    pass
