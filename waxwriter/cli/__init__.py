import click

from .commands.demo import demo_command


@click.group()
def app() -> None:
    pass


app.add_command(demo_command, name="demo")
__all__ = ["app"]
