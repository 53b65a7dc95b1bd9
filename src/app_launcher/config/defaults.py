"""Default configuration values."""

DEFAULT_CONFIG_YAML = """
search:
  include_data_home: true
  only_applications: true
  builtin_actions: true

icons:
  fallback_theme: hicolor
  size: 48

launch:
  confirm_actions: true

keybindings:
  normal:
    up: select-previous
    down: select-next
    ctrl-p: select-previous
    ctrl-n: select-next
    pageup: select-first
    pagedown: select-last
    enter: launch
    escape: quit
    ctrl-c: quit
  confirm:
    enter: confirm
    y: confirm
    n: cancel
    escape: cancel
    ctrl-c: quit

aliases:
  next: select-next
  prev: select-previous
  q: quit
"""
