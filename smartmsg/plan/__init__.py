"""Plan artifact for smartmsg.

- models: Plan, PlanItem
- store: dumps_plan, loads_plan, save_plan, load_plan
"""

from smartmsg.plan.models import Plan, PlanItem
from smartmsg.plan.store import dumps_plan, load_plan, loads_plan, save_plan

__all__ = [
    "Plan",
    "PlanItem",
    "dumps_plan",
    "loads_plan",
    "save_plan",
    "load_plan",
]
