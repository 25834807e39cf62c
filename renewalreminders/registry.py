# Registry of available commands


COMMANDS = {}


def register_command(command_class):
    """
    Register a command class in the global registry.

    Args:
        command_class: A subclass of Command to register

    Returns:
        The command class (to allow use as a decorator)
    """
    if not command_class.name:
        raise ValueError(f"{command_class.__name__} has no command name")
    COMMANDS[command_class.name] = command_class
    return command_class
