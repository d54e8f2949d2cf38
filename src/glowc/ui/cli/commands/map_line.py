"""Translate a generated shader line number back to its effect source line."""

from typing import override

from glowc.features.templating import TemplateError
from glowc.platform.logging import logger
from glowc.ui.cli.args.options import MapLineArgs
from glowc.ui.cli.commands.executor import CommandExecutor


class MapLineCommand(CommandExecutor):
    """Command printing the source line behind a generated-output line."""

    args: MapLineArgs

    @override
    def execute(self) -> int:
        try:
            mapping = self.app.map_line(self.request, self.args.source_path, self.args.output_line)
        except (TemplateError, ValueError) as exc:
            logger.error("Cannot map line: %s", exc)
            return 1
        self.result_display.show_mapping(mapping)
        return 0
