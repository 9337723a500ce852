"""Configuration of the bot identity and the command line interface."""
