"""Entry point for running roughchart as a module: python -m roughchart"""

from roughchart.cli.commands import app

if __name__ == "__main__":
    app()
