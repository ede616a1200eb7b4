"""Visual encoding of lot status and feature state.

The same constants feed the Mapbox paint expressions sent to the browser and
``resolve_paint``, which evaluates them for one feature on the server side.
"""
MAP_CENTER = [-116.5998, 31.4853]
MAP_ZOOM = 16.2
MAP_STYLE = "mapbox://styles/mapbox/satellite-streets-v12"
ORTHO_BOUNDS = [-116.6036, 31.4821, -116.5960, 31.4885]

STATUS_COLORS = {
    "available": "#34d399",
    "reserved": "#fbbf24",
    "sold": "#ef4444",
}
STATUS_FILLS = {
    "available": "rgba(52,211,153,0.3)",
    "reserved": "rgba(251,191,36,0.3)",
    "sold": "rgba(239,68,68,0.25)",
}
DEFAULT_STATUS = "available"
SELECTED_COLOR = "#0ea5e9"

LINE_WIDTH = 1.5
LINE_WIDTH_HOVER = 2.5
LINE_WIDTH_SELECTED = 3.5
FILL_OPACITY = 0.5
FILL_OPACITY_HOVER = 0.8


def _match_status(values):
    expression = ["match", ["get", "status"]]
    for status, value in values.items():
        expression.extend([status, value])
    expression.append(values[DEFAULT_STATUS])
    return expression


def _state(flag):
    return ["boolean", ["feature-state", flag], False]


def sublot_fill_paint():
    return {
        "fill-color": _match_status(STATUS_FILLS),
        "fill-opacity": ["case", _state("hover"), FILL_OPACITY_HOVER, FILL_OPACITY],
    }


def sublot_outline_paint():
    return {
        "line-color": ["case", _state("selected"), SELECTED_COLOR, _match_status(STATUS_COLORS)],
        "line-width": [
            "case",
            _state("selected"), LINE_WIDTH_SELECTED,
            _state("hover"), LINE_WIDTH_HOVER,
            LINE_WIDTH,
        ],
        "line-opacity": 0.9,
    }


def resolve_paint(status, hover=False, selected=False):
    status = (status or DEFAULT_STATUS).lower()
    if status not in STATUS_COLORS:
        status = DEFAULT_STATUS
    if selected:
        line_width = LINE_WIDTH_SELECTED
    elif hover:
        line_width = LINE_WIDTH_HOVER
    else:
        line_width = LINE_WIDTH
    return {
        "fill_color": STATUS_FILLS[status],
        "fill_opacity": FILL_OPACITY_HOVER if hover else FILL_OPACITY,
        "line_color": SELECTED_COLOR if selected else STATUS_COLORS[status],
        "line_width": line_width,
    }
