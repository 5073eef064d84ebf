"""Record builders shared by the test modules."""


def robot(robot_id: int) -> dict:
    return {"id": robot_id, "name": f"Robot {robot_id}"}


def scores(valid: int, invalid: int = 0) -> list[dict]:
    return (
        [{"isValid": True, "value": 1} for _ in range(valid)]
        + [{"isValid": False, "value": 1} for _ in range(invalid)]
    )


def game_record(
    game_id,
    a: int,
    b: int,
    rounds=(),
    result: str = "unknown",
    winner: int | None = None,
    round_win_count: int | None = None,
    free_throws=None,
) -> dict:
    status = {"result": result}
    if winner is not None:
        status["winner"] = robot(winner)
    if round_win_count is not None:
        status["roundWinCount"] = round_win_count
    record = {
        "id": game_id,
        "robots": [robot(a), robot(b)],
        "rounds": [
            {"hasEnded": ended, "scores": [scores(va), scores(vb)]}
            for va, vb, ended in rounds
        ],
        "status": status,
    }
    if free_throws is not None:
        record["freeThrows"] = {"scores": list(free_throws)}
    return record
