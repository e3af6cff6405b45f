# diamant/core/components.py

"""
Built-in Diamant components.

Every entry maps to one template file under diamant/templates/components.
"""

from typing import List

from diamant.core.models import ComponentDefinition
from diamant.core.registry import ComponentRegistry

LUCIDE = "lucide-react"

COMPONENTS: List[ComponentDefinition] = [
    ComponentDefinition(
        id="accordion",
        name="Accordion",
        description="A vertically stacked set of interactive headings that reveal content",
        dependencies=(LUCIDE,),
        internal_dependencies=(),
        files=("Accordion.tsx",),
    ),
    ComponentDefinition(
        id="alert",
        name="Alert",
        description="Displays a callout for user attention",
        dependencies=(LUCIDE,),
        internal_dependencies=(),
        files=("Alert.tsx",),
    ),
    ComponentDefinition(
        id="alertdialog",
        name="AlertDialog",
        description="A modal dialog that interrupts the user with important content",
        dependencies=(LUCIDE,),
        internal_dependencies=("button",),
        files=("AlertDialog.tsx",),
    ),
    ComponentDefinition(
        id="avatar",
        name="Avatar",
        description="An image element with a fallback for user profiles",
        dependencies=(),
        internal_dependencies=(),
        files=("Avatar.tsx",),
    ),
    ComponentDefinition(
        id="badge",
        name="Badge",
        description="Displays a small badge or tag",
        dependencies=(),
        internal_dependencies=(),
        files=("Badge.tsx",),
    ),
    ComponentDefinition(
        id="button",
        name="Button",
        description="A clickable button with multiple variants and ripple effect",
        dependencies=(),
        internal_dependencies=(),
        files=("Button.tsx",),
    ),
    ComponentDefinition(
        id="card",
        name="Card",
        description="A container for content with header, body, and footer sections",
        dependencies=(),
        internal_dependencies=(),
        files=("Card.tsx",),
    ),
    ComponentDefinition(
        id="carousel",
        name="Carousel",
        description="A slideshow component for cycling through elements",
        dependencies=(LUCIDE,),
        internal_dependencies=("button",),
        files=("Carousel.tsx",),
    ),
    ComponentDefinition(
        id="checkbox",
        name="Checkbox",
        description="A control that allows the user to toggle between checked and unchecked",
        dependencies=(LUCIDE,),
        internal_dependencies=(),
        files=("Checkbox.tsx",),
    ),
    ComponentDefinition(
        id="dialog",
        name="Dialog",
        description="A modal dialog for displaying content",
        dependencies=(LUCIDE,),
        internal_dependencies=(),
        files=("Dialog.tsx",),
    ),
    ComponentDefinition(
        id="dropdown",
        name="Dropdown",
        description="A menu that appears on click or hover",
        dependencies=(LUCIDE,),
        internal_dependencies=(),
        files=("Dropdown.tsx",),
    ),
    ComponentDefinition(
        id="fontprovider",
        name="FontProvider",
        description="Provider for managing fonts across your application",
        dependencies=(),
        internal_dependencies=(),
        files=("FontProvider.tsx",),
    ),
    ComponentDefinition(
        id="input",
        name="Input",
        description="A text input field with multiple variants",
        dependencies=(),
        internal_dependencies=(),
        files=("Input.tsx",),
    ),
    ComponentDefinition(
        id="label",
        name="Label",
        description="A label for form elements",
        dependencies=(),
        internal_dependencies=(),
        files=("Label.tsx",),
    ),
    ComponentDefinition(
        id="notification",
        name="Notification",
        description="Toast-style notifications that appear at screen corners",
        dependencies=(LUCIDE,),
        internal_dependencies=(),
        files=("Notification.tsx",),
    ),
    ComponentDefinition(
        id="progress",
        name="Progress",
        description="Displays an indicator showing the completion progress of a task",
        dependencies=(),
        internal_dependencies=(),
        files=("Progress.tsx",),
    ),
    ComponentDefinition(
        id="radio",
        name="Radio",
        description="A set of checkable buttons where only one can be selected at a time",
        dependencies=(),
        internal_dependencies=(),
        files=("Radio.tsx",),
    ),
    ComponentDefinition(
        id="select",
        name="Select",
        description="A dropdown for selecting from a list of options",
        dependencies=(LUCIDE,),
        internal_dependencies=(),
        files=("Select.tsx",),
    ),
    ComponentDefinition(
        id="separator",
        name="Separator",
        description="A visual divider between content",
        dependencies=(),
        internal_dependencies=(),
        files=("Separator.tsx",),
    ),
    ComponentDefinition(
        id="sheet",
        name="Sheet",
        description="A panel that slides in from the edge of the screen",
        dependencies=(LUCIDE,),
        internal_dependencies=(),
        files=("Sheet.tsx",),
    ),
    ComponentDefinition(
        id="skeleton",
        name="Skeleton",
        description="A placeholder for content that is loading",
        dependencies=(),
        internal_dependencies=(),
        files=("Skeleton.tsx",),
    ),
    ComponentDefinition(
        id="slider",
        name="Slider",
        description="An input for selecting a value from a range",
        dependencies=(),
        internal_dependencies=(),
        files=("Slider.tsx",),
    ),
    ComponentDefinition(
        id="switch",
        name="Switch",
        description="A toggle switch for boolean values",
        dependencies=(),
        internal_dependencies=(),
        files=("Switch.tsx",),
    ),
    ComponentDefinition(
        id="tabs",
        name="Tabs",
        description="A set of layered sections of content",
        dependencies=(),
        internal_dependencies=(),
        files=("Tabs.tsx",),
    ),
    ComponentDefinition(
        id="textarea",
        name="Textarea",
        description="A multi-line text input field",
        dependencies=(),
        internal_dependencies=(),
        files=("Textarea.tsx",),
    ),
    ComponentDefinition(
        id="toggle",
        name="Toggle",
        description="A two-state button that can be on or off",
        dependencies=(),
        internal_dependencies=(),
        files=("Toggle.tsx",),
    ),
    ComponentDefinition(
        id="tooltip",
        name="Tooltip",
        description="A popup that displays information related to an element",
        dependencies=(),
        internal_dependencies=(),
        files=("Tooltip.tsx",),
    ),
]

def default_registry() -> ComponentRegistry:
    """Registry of the components bundled with this release."""
    return ComponentRegistry(COMPONENTS)
