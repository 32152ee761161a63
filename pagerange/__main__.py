from pagerange.cli import entrypoint


entrypoint()
