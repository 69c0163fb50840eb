"""
Utilitaires partages pour les commandes CLI de SerieSync.

Ce module fournit :
- console : instance Rich Console partagee
- with_container : decorateur injectant un container initialise
- async_command : decorateur transformant une fonction async en commande sync
"""

import asyncio
import inspect
from functools import wraps

from rich.console import Console

from seriesync.container import Container

console = Console()


def with_container(requires_db: bool = True):
    """
    Decorateur qui injecte un container initialise en premier argument.

    Args :
        requires_db : Si True (defaut), initialise la base de donnees.

    Usage :
        @with_container()
        async def my_command(container, ...):
            config = container.config()
    """
    def decorator(func):
        @wraps(func)
        async def wrapper(*args, **kwargs):
            container = Container()
            if requires_db:
                container.database.init()
            return await func(container, *args, **kwargs)
        return wrapper
    return decorator


def async_command(func):
    """
    Transforme une fonction async en commande sync via asyncio.run().

    Preserve les annotations Typer pour que les options/arguments soient
    correctement interpretes. Le premier parametre (container) injecte par
    with_container est retire de la signature exposee.
    """
    @wraps(func)
    def wrapper(*args, **kwargs):
        return asyncio.run(func(*args, **kwargs))

    signature = inspect.signature(func)
    parameters = list(signature.parameters.values())
    if parameters and parameters[0].name == "container":
        parameters = parameters[1:]
    wrapper.__signature__ = signature.replace(parameters=parameters)
    return wrapper
