# Instruction templates for UI component generation
# The user's description is inserted into GENERATION_PROMPT with str.format

COMMON_INSTRUCTIONS = """
**COMPONENT LIBRARY - STRICT RULES:**
- ONLY use Shadcn UI components from this list:
  * Button, Card (CardContent, CardHeader, CardTitle, CardDescription, CardFooter)
  * Input, Textarea, Label, Select
  * Tabs (TabsList, TabsTrigger, TabsContent)
  * Dialog, AlertDialog, Form components
  * Avatar, Badge, Calendar, Checkbox, Separator, Alert, Toast
- DO NOT use components that are not listed above
- DO NOT import or use any other 3rd party library

**STYLING:**
- Tailwind CSS classes only, clean minimalist design
- Standard responsive prefixes (sm:, md:, lg:)

**CODE STRUCTURE:**
- Start with the "use client" directive
- TypeScript types for props and state
- React hooks (useState, useEffect) where needed
- Import Shadcn components exactly like: import {{ Button }} from "@/components/ui/button"
- Icons only from lucide-react, e.g. import {{ User, Mail }} from "lucide-react"
- Export the component as `export default function Name()` or `export function Name()`
- DO NOT use arrow function components

**OUTPUT FORMAT:**
- Return ONLY the complete TSX source, ready to copy/paste
- NO explanations, NO ```tsx markers

**ERROR PREVENTION:**
- Every opening tag has a matching closing tag
- All required props are provided
- TabsContent is always inside Tabs
"""

EXAMPLE_COMPONENT = """
"use client"

import {{ useState }} from "react"
import {{ Button }} from "@/components/ui/button"
import {{ Card, CardContent, CardHeader, CardTitle }} from "@/components/ui/card"
import {{ User }} from "lucide-react"

export function ExampleComponent() {{
  const [count, setCount] = useState(0)

  return (
    <Card className="w-full max-w-md mx-auto">
      <CardHeader>
        <CardTitle>Example Component</CardTitle>
      </CardHeader>
      <CardContent>
        <Button onClick={{() => setCount(count + 1)}}>
          <User className="mr-2 h-4 w-4" />
          Count: {{count}}
        </Button>
      </CardContent>
    </Card>
  )
}}
"""

GENERATION_PROMPT = f"""Generate a complete React component for a UI prototype based on this description: "{{user_prompt}}".
{COMMON_INSTRUCTIONS}
**Start from this structure:**
{EXAMPLE_COMPONENT}"""

# Fixed prompt used by the diagnostic check
DIAGNOSTIC_PROMPT = "Hello, can you respond with a simple 'Hello World!' message?"


def create_generation_prompt(user_prompt: str) -> str:
    """Create the full instruction prompt for a UI description."""
    return GENERATION_PROMPT.format(user_prompt=user_prompt)
