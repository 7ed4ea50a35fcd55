from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class ItemResult:
    status: int
    message: str
    item_id: int

    @property
    def ok(self):
        return 200 <= self.status < 300


class MultiStatus:
    """Collects one status per item and reduces them to an overall status.

    All items succeeded -> 200, none succeeded -> the shared status when every
    item failed the same way (500 otherwise), a mixture -> 207.
    """

    def __init__(self):
        self.results = []

    def add_result(self, status, message, item_id):
        self.results.append(ItemResult(status, message, item_id))

    @property
    def status(self):
        if not self.results:
            return 200
        successes = [item for item in self.results if item.ok]
        if len(successes) == len(self.results):
            return 200
        if not successes:
            statuses = {item.status for item in self.results}
            if len(statuses) == 1:
                return statuses.pop()
            return 500
        return 207

    @property
    def message(self):
        status = self.status
        if status == 200:
            return "All success"
        if status == 207:
            return "Partial success"
        return "All failed"

    @property
    def failures(self):
        return [item for item in self.results if not item.ok]

    def as_struct(self):
        return {
            "status": self.status,
            "message": self.message,
            "results": [
                {"status": item.status, "message": item.message, "item_id": item.item_id}
                for item in self.results
            ],
        }


@dataclass
class RunResult:
    action: str
    envelope: Optional[MultiStatus] = None
    rows: List[str] = field(default_factory=list)
    errors: List[ItemResult] = field(default_factory=list)

    @property
    def ok(self):
        if self.envelope is not None:
            return self.envelope.status == 200
        return not self.errors
