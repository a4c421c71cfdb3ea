"""
Fallback component synthesized locally when the generation service is
unavailable or fails.
"""
import json
import logging
from typing import Optional

from config.component_library import DEFAULT_COMPONENT_NAME

logger = logging.getLogger(__name__)

TROUBLESHOOTING_TIPS = [
    "Check if your API key is configured correctly",
    "Try a simpler or more specific prompt",
    "The service might be temporarily unavailable",
]


def _js_string(value: str) -> str:
    # JSON string literals are valid JS string literals
    return json.dumps(value, ensure_ascii=False)


def generate_fallback_component(prompt: str, error_message: Optional[str] = None) -> str:
    """
    Build a deterministic component that shows the prompt and, when given,
    the error that prevented generation.

    User-supplied text is embedded as string literals inside JSX expressions,
    so quotes or braces in the prompt cannot break the source.
    """
    error_block = ""
    if error_message:
        error_block = f"""
          <Alert variant="destructive">
            <AlertTriangle className="h-4 w-4" />
            <AlertTitle>Generation Error</AlertTitle>
            <AlertDescription>{{{_js_string(error_message)}}}</AlertDescription>
          </Alert>
"""

    tips = "\n".join(
        f'                  <li>{{{_js_string(tip)}}}</li>' for tip in TROUBLESHOOTING_TIPS
    )

    logger.info(f"Generating fallback component (error: {error_message is not None})")
    return f'''"use client"

import {{ useState }} from "react"
import {{ Button }} from "@/components/ui/button"
import {{ Card, CardContent, CardDescription, CardFooter, CardHeader, CardTitle }} from "@/components/ui/card"
import {{ Alert, AlertDescription, AlertTitle }} from "@/components/ui/alert"
import {{ InfoIcon, AlertTriangle }} from "lucide-react"

export default function {DEFAULT_COMPONENT_NAME}() {{
  const [showDetails, setShowDetails] = useState(false)

  return (
    <div className="p-6 max-w-4xl mx-auto">
      <Card className="shadow-lg">
        <CardHeader>
          <CardTitle className="text-2xl">UI Prototype: {{{_js_string(prompt)}}}</CardTitle>
          <CardDescription>
            This is a fallback component generated when the AI service couldn't create the requested UI.
          </CardDescription>
        </CardHeader>
        <CardContent className="space-y-4">{error_block}
          <div className="p-4 border rounded-md bg-muted">
            <h3 className="text-lg font-medium mb-2">Prompt</h3>
            <p className="text-sm">{{{_js_string(prompt)}}}</p>
          </div>

          {{showDetails && (
            <Alert>
              <InfoIcon className="h-4 w-4" />
              <AlertTitle>Troubleshooting</AlertTitle>
              <AlertDescription>
                <ul className="list-disc pl-5 text-sm space-y-1 mt-2">
{tips}
                </ul>
              </AlertDescription>
            </Alert>
          )}}
        </CardContent>
        <CardFooter className="flex justify-between">
          <Button variant="outline" onClick={{() => setShowDetails(!showDetails)}}>
            {{showDetails ? "Hide Details" : "Show Details"}}
          </Button>
        </CardFooter>
      </Card>
    </div>
  )
}}
'''
