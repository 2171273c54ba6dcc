from fastapi import APIRouter, Body, Depends, HTTPException

from agro.api.context import AppContext, require_view
from agro.domain.Navigation import View
from agro.utilities.validators import TaskForm

router = APIRouter()

checklist_access = require_view(View.CHECKLIST)


def _task_or_404(ctx: AppContext, task_id: int):
    try:
        return ctx.tasks.get(task_id)
    except KeyError:
        raise HTTPException(status_code=404, detail="Attività non trovata")


@router.get("/api/tasks")
async def api_tasks(ctx: AppContext = Depends(checklist_access)):
    return {
        "pending": [t.to_dict() for t in ctx.tasks.pending()],
        "completed": [t.to_dict() for t in ctx.tasks.completed()],
        "suggestions": [s.to_dict() for s in ctx.suggestions],
    }


@router.post("/api/tasks")
async def api_add_task(payload: dict = Body(...), ctx: AppContext = Depends(checklist_access)):
    form = TaskForm.parse(payload)
    task = ctx.tasks.add(form.title, form.due_date)
    return {"status": "success", "task": task.to_dict()}


@router.put("/api/tasks/{task_id}")
async def api_update_task(task_id: int, payload: dict = Body(...), ctx: AppContext = Depends(checklist_access)):
    _task_or_404(ctx, task_id)
    form = TaskForm.parse(payload)
    task = ctx.tasks.update(task_id, form.title, form.due_date)
    return {"status": "success", "task": task.to_dict()}


@router.post("/api/tasks/{task_id}/toggle")
async def api_toggle_task(task_id: int, ctx: AppContext = Depends(checklist_access)):
    _task_or_404(ctx, task_id)
    return ctx.tasks.toggle(task_id).to_dict()


@router.delete("/api/tasks/{task_id}")
async def api_delete_task(task_id: int, ctx: AppContext = Depends(checklist_access)):
    _task_or_404(ctx, task_id)
    ctx.tasks.delete(task_id)
    return {"status": "success"}
