class DebwrapError(Exception):
    pass


class ValidationError(DebwrapError):
    """A mandatory control field is missing."""

    def __init__(self, field: str) -> None:
        self.field = field
        super().__init__(
            f"{field.capitalize()} field for control file is mandatory"
        )


class ConfigurationError(DebwrapError):
    pass


class MissingToolError(DebwrapError):
    pass


class ToolInvocationError(DebwrapError):
    def __init__(
        self, command: list[str], exit_status: int, stdout: str, stderr: str
    ) -> None:
        self.command = command
        self.exit_status = exit_status
        self.stdout = stdout
        self.stderr = stderr
        super().__init__(
            f"Command failed with exit code {exit_status}.\n"
            f"  Command: {' '.join(command)}\n"
            f"  Stdout:\n{stdout.strip()}\n"
            f"  Stderr:\n{stderr.strip()}"
        )
