"""Checklist domain: tasks, weather-derived suggestions and the TaskList aggregate."""
from enum import Enum
from typing import List, Optional

from agro.utilities.errors import ValidationFailed


class TaskCategory(str, Enum):
    DAILY = "Daily"
    WEEKLY = "Weekly"
    GENERAL = "General"


class Task:
    def __init__(self, id: int, title: str, due_date: str, completed: bool = False,
                 category: TaskCategory = TaskCategory.GENERAL):
        self.id = id
        self.title = title
        self.due_date = due_date
        self.completed = completed
        self.category = TaskCategory(category)

    def __str__(self) -> str:
        mark = "x" if self.completed else " "
        return f"[{mark}] {self.title} ({self.due_date})"

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        d = dict(data)
        return Task(
            id=int(d["id"]),
            title=d.get("title", ""),
            due_date=d.get("due_date", ""),
            completed=bool(d.get("completed", False)),
            category=d.get("category", TaskCategory.GENERAL),
        )

    def to_dict(self):
        return {
            "id": self.id,
            "title": self.title,
            "due_date": self.due_date,
            "completed": self.completed,
            "category": self.category.value,
        }


class TaskSuggestion:
    """Advice derived from the forecast; ``rule`` identifies the rule that produced it."""

    def __init__(self, rule: str, title: str, reason: str, type: str = "suggestion"):
        self.rule = rule
        self.title = title
        self.reason = reason
        self.type = type

    def __repr__(self) -> str:
        return f"TaskSuggestion({self.rule!r}, {self.title!r})"

    def to_dict(self):
        return {"rule": self.rule, "title": self.title, "reason": self.reason, "type": self.type}


class TaskList:
    def __init__(self, tasks: Optional[List[Task]] = None):
        self.tasks: List[Task] = list(tasks) if tasks else []

    def _next_id(self) -> int:
        return max([t.id for t in self.tasks] + [0]) + 1

    def get(self, task_id: int) -> Task:
        for task in self.tasks:
            if task.id == task_id:
                return task
        raise KeyError(task_id)

    def add(self, title: str, due_date: str) -> Task:
        '''
        Appends a General, not completed task.
        '''
        if not title or not title.strip():
            raise ValidationFailed("Il titolo è obbligatorio.")
        task = Task(self._next_id(), title.strip(), due_date, False, TaskCategory.GENERAL)
        self.tasks.append(task)
        return task

    def update(self, task_id: int, title: str, due_date: str) -> Task:
        if not title or not title.strip():
            raise ValidationFailed("Il titolo è obbligatorio.")
        task = self.get(task_id)
        task.title = title.strip()
        task.due_date = due_date
        return task

    def toggle(self, task_id: int) -> Task:
        task = self.get(task_id)
        task.completed = not task.completed
        return task

    def delete(self, task_id: int) -> None:
        self.tasks = [t for t in self.tasks if t.id != task_id]

    def pending(self) -> List[Task]:
        return sorted((t for t in self.tasks if not t.completed), key=lambda t: t.due_date)

    def completed(self) -> List[Task]:
        return sorted((t for t in self.tasks if t.completed), key=lambda t: t.due_date, reverse=True)

    def to_dict(self):
        return [t.to_dict() for t in self.tasks]

    @staticmethod
    def from_dict(data):
        return TaskList([Task.from_dict(d) for d in data or []])
