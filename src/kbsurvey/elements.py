"""
Visual elements drawn by the host.

The survey engine never draws anything. It creates elements on a Canvas and
changes their text, position, color and visibility. Once per frame the host
renderer iterates ``Canvas.visible()`` and draws what it finds.
"""

from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple, Union


@dataclass(eq=False)
class TextElement:
    text: str = ""
    pos: Tuple[float, float] = (0.0, 0.0)
    height: float = 0.05
    color: str = "black"
    wrap_width: Optional[float] = None
    visible: bool = False
    name: str = ""

    def show(self) -> None:
        self.visible = True

    def hide(self) -> None:
        self.visible = False


@dataclass(eq=False)
class ImageElement:
    image: Optional[str] = None
    pos: Tuple[float, float] = (0.0, 0.0)
    size: Tuple[float, float] = (1.0, 0.8)
    visible: bool = False
    name: str = ""

    def show(self) -> None:
        self.visible = True

    def hide(self) -> None:
        self.visible = False


Element = Union[TextElement, ImageElement]


@dataclass
class Canvas:
    """Registry of every element the engine created, in creation order."""

    elements: List[Element] = field(default_factory=list)

    def text(self, **kwargs) -> TextElement:
        element = TextElement(**kwargs)
        self.elements.append(element)
        return element

    def image(self, **kwargs) -> ImageElement:
        element = ImageElement(**kwargs)
        self.elements.append(element)
        return element

    def remove(self, element: Element) -> None:
        if element in self.elements:
            self.elements.remove(element)

    def visible(self) -> Iterator[Element]:
        return (element for element in self.elements if element.visible)

    def visible_texts(self) -> List[str]:
        return [e.text for e in self.visible() if isinstance(e, TextElement)]
