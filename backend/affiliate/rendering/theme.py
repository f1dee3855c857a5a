DEFAULT_THEME = {
    "primaryColor": "#2563eb",
    "secondaryColor": "#1e293b",
    "accentColor": "#f59e0b",
}

# theme key -> CSS custom property
THEME_VARIABLES = {
    "primaryColor": "--site-primary",
    "secondaryColor": "--site-secondary",
    "accentColor": "--site-accent",
    "backgroundColor": "--site-background",
    "textColor": "--site-text",
    "fontFamily": "--site-font",
    "headingFontFamily": "--site-heading-font",
}


def theme_css_variables(theme):
    """Site theme tokens as an ordered list of ``(css variable, value)`` pairs."""
    merged = {**DEFAULT_THEME, **{k: v for k, v in (theme or {}).items() if v}}
    return [
        (variable, str(merged[key]))
        for key, variable in THEME_VARIABLES.items()
        if key in merged
    ]
