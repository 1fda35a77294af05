"""Extract weekly canteen menus from HTML pages into ISO-week JSON documents."""

__version__ = "0.1.0"
