from .alert_editing import AlertUpdate as AlertUpdate
from .alert_editing import apply_update as apply_update
from .alert_editing import is_eligible_for_sweep as is_eligible_for_sweep
from .alert_editing import toggle_active as toggle_active
from .alert_evaluator import EvaluationOutcome as EvaluationOutcome
from .alert_evaluator import evaluate as evaluate
from .alert_queries import DEFAULT_PAGE_LIMIT as DEFAULT_PAGE_LIMIT
from .alert_queries import AlertFilters as AlertFilters
from .alert_queries import AlertPage as AlertPage
from .alert_queries import AlertStats as AlertStats
from .alert_queries import filter_alerts as filter_alerts
from .alert_queries import summarize_alerts as summarize_alerts
from .alert_rules import decide_trigger as decide_trigger
