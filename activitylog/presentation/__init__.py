"""Display formatting, view models and form handling."""
from .formatting import (
    event_duration_minutes,
    format_clock,
    format_date_label,
    format_duration,
    format_elapsed,
    format_start_display,
    group_events_by_date,
)
from .forms import build_event_fields, parse_input_value, resolve_end_time, to_input_value
from .timers import ElapsedTicker, IntervalTimer, StartTimeDefault
from .views import aggregation_view, current_event_view, detailed_view

__all__ = [
    'event_duration_minutes', 'format_clock', 'format_date_label', 'format_duration',
    'format_elapsed', 'format_start_display', 'group_events_by_date',
    'build_event_fields', 'parse_input_value', 'resolve_end_time', 'to_input_value',
    'ElapsedTicker', 'IntervalTimer', 'StartTimeDefault',
    'aggregation_view', 'current_event_view', 'detailed_view',
]
