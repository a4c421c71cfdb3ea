"""
Component Library Stand-ins for the UI Prototyper sandbox

This module holds the fixed lookup table from component-library element name
to the plain element that stands in for it inside the sandbox. Generated code
imports these names from "@/components/ui/..."; the sandbox never has the real
library, so each name renders as a styled container instead.

The table is built once at import time and is never mutated.
"""

from types import MappingProxyType
from typing import Dict, List, Mapping, TypedDict


class _StandInBase(TypedDict):
    tag: str
    class_name: str


class StandIn(_StandInBase, total=False):
    """Type definition for a component stand-in."""
    props: Dict[str, str]  # fixed attributes, e.g. an input type


# Import path prefix used by generated code for library components
COMPONENT_LIBRARY_PREFIX = "@/components/ui/"

# Package generated code imports its icons from
ICON_PACKAGE = "lucide-react"

# Identifier rendered when no export pattern matches
DEFAULT_COMPONENT_NAME = "GeneratedComponent"

# Stand-in used for library names that are imported but not in the table
GENERIC_STAND_IN: StandIn = {"tag": "div", "class_name": ""}

# Elements that cannot receive children
VOID_TAGS = frozenset({"input", "img", "hr", "br"})

# React exports that generated code uses without a "React." prefix
REACT_HOOKS: List[str] = [
    "useState",
    "useEffect",
    "useRef",
    "useMemo",
    "useCallback",
    "useReducer",
    "useContext",
    "useLayoutEffect",
    "useId",
    "Fragment",
    "createContext",
    "forwardRef",
]

_BUTTON = "inline-flex items-center justify-center rounded-md text-sm font-medium h-10 px-4 py-2 bg-slate-900 text-white"
_FIELD = "flex h-10 w-full rounded-md border border-slate-200 bg-white px-3 py-2 text-sm"
_PANEL = "rounded-lg border border-slate-200 bg-white shadow-sm"
_MENU = "rounded-md border border-slate-200 bg-white p-1 shadow-md"
_ITEM = "flex items-center rounded-sm px-2 py-1.5 text-sm"

_STAND_INS: Dict[str, StandIn] = {
    # Layout and panels
    "Card": {"tag": "div", "class_name": _PANEL},
    "CardHeader": {"tag": "div", "class_name": "flex flex-col space-y-1.5 p-6"},
    "CardTitle": {"tag": "h3", "class_name": "text-2xl font-semibold leading-none tracking-tight"},
    "CardDescription": {"tag": "p", "class_name": "text-sm text-slate-500"},
    "CardContent": {"tag": "div", "class_name": "p-6 pt-0"},
    "CardFooter": {"tag": "div", "class_name": "flex items-center p-6 pt-0"},
    "AspectRatio": {"tag": "div", "class_name": "relative w-full"},
    "ScrollArea": {"tag": "div", "class_name": "relative overflow-auto"},
    "ScrollBar": {"tag": "div", "class_name": "hidden"},
    "Separator": {"tag": "hr", "class_name": "my-4 border-slate-200"},
    "Skeleton": {"tag": "div", "class_name": "animate-pulse rounded-md bg-slate-100 h-4"},
    "Collapsible": {"tag": "div", "class_name": ""},
    "CollapsibleTrigger": {"tag": "button", "class_name": "text-sm font-medium"},
    "CollapsibleContent": {"tag": "div", "class_name": ""},
    "Accordion": {"tag": "div", "class_name": "w-full"},
    "AccordionItem": {"tag": "div", "class_name": "border-b border-slate-200"},
    "AccordionTrigger": {"tag": "button", "class_name": "flex w-full items-center justify-between py-4 font-medium"},
    "AccordionContent": {"tag": "div", "class_name": "pb-4 pt-0 text-sm"},
    # Buttons and form controls
    "Button": {"tag": "button", "class_name": _BUTTON},
    "Input": {"tag": "input", "class_name": _FIELD},
    "Textarea": {"tag": "textarea", "class_name": "flex min-h-[80px] w-full rounded-md border border-slate-200 bg-white px-3 py-2 text-sm"},
    "Label": {"tag": "label", "class_name": "block text-sm font-medium mb-1"},
    "Checkbox": {"tag": "input", "class_name": "h-4 w-4 rounded border border-slate-300", "props": {"type": "checkbox"}},
    "Switch": {"tag": "button", "class_name": "inline-flex h-6 w-11 items-center rounded-full bg-slate-200"},
    "Slider": {"tag": "input", "class_name": "w-full", "props": {"type": "range"}},
    "Progress": {"tag": "div", "class_name": "relative h-4 w-full overflow-hidden rounded-full bg-slate-100"},
    "RadioGroup": {"tag": "div", "class_name": "grid gap-2"},
    "RadioGroupItem": {"tag": "input", "class_name": "h-4 w-4 rounded-full border border-slate-300", "props": {"type": "radio"}},
    "Toggle": {"tag": "button", "class_name": "inline-flex items-center justify-center rounded-md text-sm font-medium h-10 px-3"},
    "ToggleGroup": {"tag": "div", "class_name": "flex items-center gap-1"},
    "ToggleGroupItem": {"tag": "button", "class_name": "inline-flex items-center justify-center rounded-md text-sm h-10 px-3"},
    "Select": {"tag": "div", "class_name": "relative"},
    "SelectTrigger": {"tag": "button", "class_name": _FIELD + " items-center justify-between"},
    "SelectValue": {"tag": "span", "class_name": ""},
    "SelectContent": {"tag": "div", "class_name": _MENU},
    "SelectGroup": {"tag": "div", "class_name": ""},
    "SelectLabel": {"tag": "div", "class_name": "py-1.5 pl-8 pr-2 text-sm font-semibold"},
    "SelectItem": {"tag": "div", "class_name": _ITEM},
    "SelectSeparator": {"tag": "hr", "class_name": "-mx-1 my-1 border-slate-100"},
    "Form": {"tag": "form", "class_name": "space-y-4"},
    "FormField": {"tag": "div", "class_name": ""},
    "FormItem": {"tag": "div", "class_name": "space-y-2"},
    "FormLabel": {"tag": "label", "class_name": "text-sm font-medium"},
    "FormControl": {"tag": "div", "class_name": ""},
    "FormDescription": {"tag": "p", "class_name": "text-sm text-slate-500"},
    "FormMessage": {"tag": "p", "class_name": "text-sm font-medium text-red-500"},
    "Calendar": {"tag": "div", "class_name": "p-3 rounded-md border border-slate-200"},
    # Tabs
    "Tabs": {"tag": "div", "class_name": ""},
    "TabsList": {"tag": "div", "class_name": "inline-flex h-10 items-center justify-center rounded-md bg-slate-100 p-1"},
    "TabsTrigger": {"tag": "button", "class_name": "inline-flex items-center justify-center rounded-sm px-3 py-1.5 text-sm font-medium"},
    "TabsContent": {"tag": "div", "class_name": "mt-2"},
    # Display
    "Avatar": {"tag": "span", "class_name": "relative flex h-10 w-10 shrink-0 overflow-hidden rounded-full bg-slate-100"},
    "AvatarImage": {"tag": "img", "class_name": "aspect-square h-full w-full"},
    "AvatarFallback": {"tag": "span", "class_name": "flex h-full w-full items-center justify-center rounded-full bg-slate-100"},
    "Badge": {"tag": "span", "class_name": "inline-flex items-center rounded-full border px-2.5 py-0.5 text-xs font-semibold"},
    "Alert": {"tag": "div", "class_name": "relative w-full rounded-lg border border-slate-200 p-4"},
    "AlertTitle": {"tag": "h5", "class_name": "mb-1 font-medium leading-none tracking-tight"},
    "AlertDescription": {"tag": "div", "class_name": "text-sm"},
    "Table": {"tag": "table", "class_name": "w-full caption-bottom text-sm"},
    "TableHeader": {"tag": "thead", "class_name": ""},
    "TableBody": {"tag": "tbody", "class_name": ""},
    "TableFooter": {"tag": "tfoot", "class_name": "bg-slate-100 font-medium"},
    "TableRow": {"tag": "tr", "class_name": "border-b border-slate-200"},
    "TableHead": {"tag": "th", "class_name": "h-12 px-4 text-left align-middle font-medium text-slate-500"},
    "TableCell": {"tag": "td", "class_name": "p-4 align-middle"},
    "TableCaption": {"tag": "caption", "class_name": "mt-4 text-sm text-slate-500"},
    # Overlays
    "Dialog": {"tag": "div", "class_name": ""},
    "DialogTrigger": {"tag": "span", "class_name": ""},
    "DialogContent": {"tag": "div", "class_name": _PANEL + " p-6 mt-2"},
    "DialogHeader": {"tag": "div", "class_name": "flex flex-col space-y-1.5"},
    "DialogFooter": {"tag": "div", "class_name": "flex justify-end gap-2"},
    "DialogTitle": {"tag": "h2", "class_name": "text-lg font-semibold"},
    "DialogDescription": {"tag": "p", "class_name": "text-sm text-slate-500"},
    "DialogClose": {"tag": "button", "class_name": "text-sm"},
    "AlertDialog": {"tag": "div", "class_name": ""},
    "AlertDialogTrigger": {"tag": "span", "class_name": ""},
    "AlertDialogContent": {"tag": "div", "class_name": _PANEL + " p-6 mt-2"},
    "AlertDialogHeader": {"tag": "div", "class_name": "flex flex-col space-y-2"},
    "AlertDialogFooter": {"tag": "div", "class_name": "flex justify-end gap-2"},
    "AlertDialogTitle": {"tag": "h2", "class_name": "text-lg font-semibold"},
    "AlertDialogDescription": {"tag": "p", "class_name": "text-sm text-slate-500"},
    "AlertDialogAction": {"tag": "button", "class_name": _BUTTON},
    "AlertDialogCancel": {"tag": "button", "class_name": "inline-flex items-center justify-center rounded-md border px-4 py-2 text-sm"},
    "Sheet": {"tag": "div", "class_name": ""},
    "SheetTrigger": {"tag": "span", "class_name": ""},
    "SheetContent": {"tag": "div", "class_name": _PANEL + " p-6"},
    "SheetHeader": {"tag": "div", "class_name": "flex flex-col space-y-2"},
    "SheetFooter": {"tag": "div", "class_name": "flex justify-end gap-2"},
    "SheetTitle": {"tag": "h2", "class_name": "text-lg font-semibold"},
    "SheetDescription": {"tag": "p", "class_name": "text-sm text-slate-500"},
    "SheetClose": {"tag": "button", "class_name": "text-sm"},
    "Popover": {"tag": "div", "class_name": "relative"},
    "PopoverTrigger": {"tag": "span", "class_name": ""},
    "PopoverContent": {"tag": "div", "class_name": _MENU + " w-72 p-4"},
    "Tooltip": {"tag": "span", "class_name": ""},
    "TooltipProvider": {"tag": "div", "class_name": ""},
    "TooltipTrigger": {"tag": "span", "class_name": ""},
    "TooltipContent": {"tag": "span", "class_name": "hidden"},
    "Toast": {"tag": "div", "class_name": "fixed bottom-4 right-4 rounded-md border bg-white p-4 shadow-lg"},
    "ToastTitle": {"tag": "div", "class_name": "text-sm font-semibold"},
    "ToastDescription": {"tag": "div", "class_name": "text-sm opacity-90"},
    "ToastAction": {"tag": "button", "class_name": "text-sm font-medium"},
    "ToastClose": {"tag": "button", "class_name": "text-sm"},
    "ToastProvider": {"tag": "div", "class_name": ""},
    "ToastViewport": {"tag": "div", "class_name": ""},
    # Menus and commands
    "DropdownMenu": {"tag": "div", "class_name": "relative inline-block"},
    "DropdownMenuTrigger": {"tag": "span", "class_name": ""},
    "DropdownMenuContent": {"tag": "div", "class_name": _MENU},
    "DropdownMenuGroup": {"tag": "div", "class_name": ""},
    "DropdownMenuItem": {"tag": "div", "class_name": _ITEM},
    "DropdownMenuCheckboxItem": {"tag": "div", "class_name": _ITEM},
    "DropdownMenuRadioGroup": {"tag": "div", "class_name": ""},
    "DropdownMenuRadioItem": {"tag": "div", "class_name": _ITEM},
    "DropdownMenuLabel": {"tag": "div", "class_name": "px-2 py-1.5 text-sm font-semibold"},
    "DropdownMenuSeparator": {"tag": "hr", "class_name": "-mx-1 my-1 border-slate-100"},
    "DropdownMenuShortcut": {"tag": "span", "class_name": "ml-auto text-xs tracking-widest opacity-60"},
    "DropdownMenuPortal": {"tag": "div", "class_name": ""},
    "DropdownMenuSub": {"tag": "div", "class_name": ""},
    "DropdownMenuSubTrigger": {"tag": "div", "class_name": _ITEM},
    "DropdownMenuSubContent": {"tag": "div", "class_name": _MENU},
    "Menubar": {"tag": "div", "class_name": "flex h-10 items-center space-x-1 rounded-md border bg-white p-1"},
    "MenubarMenu": {"tag": "div", "class_name": "relative"},
    "MenubarTrigger": {"tag": "button", "class_name": "px-3 py-1.5 text-sm font-medium"},
    "MenubarContent": {"tag": "div", "class_name": _MENU},
    "MenubarItem": {"tag": "div", "class_name": _ITEM},
    "MenubarCheckboxItem": {"tag": "div", "class_name": _ITEM},
    "MenubarRadioGroup": {"tag": "div", "class_name": ""},
    "MenubarRadioItem": {"tag": "div", "class_name": _ITEM},
    "MenubarLabel": {"tag": "div", "class_name": "px-2 py-1.5 text-sm font-semibold"},
    "MenubarSeparator": {"tag": "hr", "class_name": "-mx-1 my-1 border-slate-100"},
    "MenubarShortcut": {"tag": "span", "class_name": "ml-auto text-xs tracking-widest"},
    "MenubarGroup": {"tag": "div", "class_name": ""},
    "MenubarPortal": {"tag": "div", "class_name": ""},
    "MenubarSub": {"tag": "div", "class_name": ""},
    "MenubarSubTrigger": {"tag": "div", "class_name": _ITEM},
    "MenubarSubContent": {"tag": "div", "class_name": _MENU},
    "Command": {"tag": "div", "class_name": "flex h-full w-full flex-col overflow-hidden rounded-md bg-white"},
    "CommandDialog": {"tag": "div", "class_name": _PANEL},
    "CommandInput": {"tag": "input", "class_name": _FIELD},
    "CommandList": {"tag": "div", "class_name": "max-h-[300px] overflow-y-auto"},
    "CommandEmpty": {"tag": "div", "class_name": "py-6 text-center text-sm"},
    "CommandGroup": {"tag": "div", "class_name": "overflow-hidden p-1"},
    "CommandItem": {"tag": "div", "class_name": _ITEM},
    "CommandSeparator": {"tag": "hr", "class_name": "-mx-1 border-slate-100"},
    "CommandShortcut": {"tag": "span", "class_name": "ml-auto text-xs tracking-widest"},
}

# Process-wide, read-only lookup table
COMPONENT_STAND_INS: Mapping[str, StandIn] = MappingProxyType(_STAND_INS)


def get_stand_in(component_name: str) -> StandIn:
    """
    Get the stand-in for a component-library element name.

    Args:
        component_name: Name as imported by generated code (e.g. "CardTitle")

    Returns:
        The table entry, or the generic container stand-in for unknown names
    """
    return COMPONENT_STAND_INS.get(component_name, GENERIC_STAND_IN)


def is_supported_component(component_name: str) -> bool:
    """Check whether a name has a dedicated stand-in."""
    return component_name in COMPONENT_STAND_INS


def get_supported_component_names() -> List[str]:
    """Get all component names with a dedicated stand-in, sorted."""
    return sorted(COMPONENT_STAND_INS)
