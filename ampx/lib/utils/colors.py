"""
Terminal styling of the messages printed by the CLI
"""

import click


class Colored:
    """
    Wraps text in ANSI styles through click.style, ex: Colored().green("done").

    With ``colorize=False`` every method hands back the text untouched, which keeps test assertions and
    redirected output readable.
    """

    def __init__(self, colorize=True):
        self.colorize = colorize

    def _style(self, msg, **styles):
        if not self.colorize:
            return msg
        return click.style(msg, **styles)

    def green(self, msg):
        return self._style(msg, fg="green")

    def cyan(self, msg):
        return self._style(msg, fg="cyan")

    def blue(self, msg):
        return self._style(msg, fg="blue")

    def grey(self, msg):
        return self._style(msg, fg="bright_black")

    def bold(self, msg):
        return self._style(msg, bold=True)

    def underline(self, msg):
        return self._style(msg, underline=True)
