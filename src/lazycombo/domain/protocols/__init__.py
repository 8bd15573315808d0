"""Domain protocols - interfaces the combo model depends on.

Using protocols keeps the model independent of any UI toolkit and makes
testing with simple stand-ins straightforward.
"""

from lazycombo.domain.protocols.dispatcher import Dispatcher
from lazycombo.domain.protocols.host import ComboHost

__all__ = [
    "Dispatcher",
    "ComboHost",
]
