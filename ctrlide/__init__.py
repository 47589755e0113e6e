"""Controller project IDE: DI/DO module configuration, project tree, themes and a Tk window."""

__version__ = "1.0.0"
__all__ = ["components", "config_editor", "controller", "gui", "iomodule", "project", "themes"]