from src.dicepool.scenarios.demo_table import create_demo_face_table, DEMO_FACES

__all__ = ["create_demo_face_table", "DEMO_FACES"]
