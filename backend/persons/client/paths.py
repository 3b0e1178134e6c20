from __future__ import annotations


class PersonPaths:
    """Resource paths shared by the person router and the person endpoint."""

    ROOT = "/api/persons"
    RESULTS_LIST = "results-list"
    RESULTS_LIST_PATH = f"{ROOT}/{RESULTS_LIST}"

    @classmethod
    def get_by_id_path(cls, person_id: int) -> str:
        return f"{cls.ROOT}/{int(person_id)}"
