import shlex


class Command:
    def __init__(self, raw_command):
        self.raw_command = raw_command.strip()
        self.parse_command()

    def parse_command(self):
        """Split the raw line into a verb and arguments, honouring quotes.

        Raises ValueError on unbalanced quotes.
        """
        parts = shlex.split(self.raw_command)
        if parts:
            self.name = parts[0].lower()
            self.args = parts[1:]
        else:
            self.name = ""
            self.args = []

    def __str__(self):
        return f"Command(name='{self.name}', args={self.args})"

    def get_name(self):
        return self.name

    def arg_count(self):
        return len(self.args)

    def require_args(self, count):
        """True if the command has exactly ``count`` arguments."""
        return self.arg_count() == count

    def get_arg(self, index, default=None):
        try:
            return self.args[index]
        except IndexError:
            return default
