"""Resource handlers for the people and task endpoints.

Both handlers are pure: nothing is stored and no shared state is mutated.
"""
import logging
from typing import List

from .constants import INT32_MIN, TASK_ID_PREFIX, UINT32_MASK
from .models import NewTaskRequest, Person, TaskResponse

logger = logging.getLogger(__name__)

PEOPLE = (
    Person(id="1", name="Alice Johnson"),
    Person(id="2", name="Bob Smith"),
    Person(id="3", name="Charlie Diaz"),
)


def list_people() -> List[Person]:
    return list(PEOPLE)


def string_hash(value: str) -> int:
    """Java-compatible ``String.hashCode``: 31-polynomial over UTF-16 code units, signed 32 bit."""
    h = 0
    data = value.encode('utf-16-be', 'surrogatepass')
    for i in range(0, len(data), 2):
        unit = (data[i] << 8) | data[i + 1]
        h = (31 * h + unit) & UINT32_MASK
    if h & 0x80000000:
        h -= 1 << 32
    return h


def int32_abs(n: int) -> int:
    # abs() of the smallest int32 overflows back to itself
    if n == INT32_MIN:
        return n
    return abs(n)


def derive_task_id(title: str) -> str:
    """Identifier derived from the title alone; equal titles give equal ids."""
    return f"{TASK_ID_PREFIX}{int32_abs(string_hash(title))}"


def create_task(request: NewTaskRequest) -> TaskResponse:
    task_id = derive_task_id(request.title)
    logger.info("Created task %s (priority=%s)", task_id, request.priority.value)
    return TaskResponse(id=task_id, title=request.title)
