"""
Sales Agent Module

Reads free-text RFP documents with Gemini and extracts the RFP summary and
the technical specifications of every product in scope.
"""

import json
import logging
import os
import re
from typing import Any, Dict, List, Optional, Sequence

import google.generativeai as genai

from rfp_bid_agent.models import ProductSpec, RFPSummary

logger = logging.getLogger(__name__)

_JSON_OBJECT_RE = re.compile(r"\{[\s\S]*\}")

SUMMARY_PROMPT = """You are a Sales Agent analyzing B2B RFP documents for industrial manufacturers.

Extract the following information from the RFP document and return it as a JSON object:
1. RFP Name
2. Due Date (in YYYY-MM-DD format)
3. List of products in scope of supply
4. Testing and acceptance requirements

RFP Document:
{rfp_text}

Return ONLY a JSON object in this exact format:
{{
  "rfpName": "string",
  "dueDate": "YYYY-MM-DD",
  "products": ["product1", "product2"],
  "tests": ["test1", "test2"]
}}

If information is not found, use reasonable defaults. Do not include any other text."""

SPEC_PROMPT = """You are a Technical Specification Analyst. Extract detailed technical specifications for the following product from the RFP document.

Product: {product_name}

RFP Document:
{rfp_text}

Extract all technical parameters in the following JSON format:
{{
  "productName": "{product_name}",
  "specifications": [
    {{
      "parameter": "parameter name",
      "value": "value",
      "unit": "unit or empty string if not applicable"
    }}
  ]
}}

Include parameters like:
- Voltage Rating
- Current Rating
- Insulation Type
- Conductor Material
- Temperature Rating
- Capacity
- Standard/Certification
- Any other technical specifications mentioned

For the "unit" field, use an empty string "" if the parameter has no unit (e.g. materials, standards). Never use null.

Return ONLY the JSON object, no additional text."""


class ExtractionError(ValueError):
    """Raised when an LLM reply cannot be turned into structured data."""


def extract_json_object(content: str) -> Dict[str, Any]:
    """
    Pull the outermost JSON object out of an LLM reply.
    
    Args:
        content: Raw model output, possibly wrapped in prose or code fences
        
    Returns:
        Parsed JSON object
        
    Raises:
        ExtractionError: If no parseable JSON object is present
    """
    match = _JSON_OBJECT_RE.search(content or "")
    if not match:
        raise ExtractionError("Failed to extract JSON from response")
    
    try:
        parsed = json.loads(match.group(0))
    except json.JSONDecodeError as e:
        raise ExtractionError(f"Malformed JSON in response: {e}") from e
    
    if not isinstance(parsed, dict):
        raise ExtractionError("Expected a JSON object in response")
    return parsed


class SalesAgent:
    """
    Qualifies RFPs using the Gemini API.
    """
    
    def __init__(self, api_key: Optional[str] = None, model_name: str = "gemini-1.5-pro"):
        """
        Initialize the Sales Agent.
        
        Args:
            api_key: Google API key (if None, reads from GOOGLE_API_KEY env var)
            model_name: Gemini model to use
        """
        self.api_key = api_key or os.getenv("GOOGLE_API_KEY")
        if not self.api_key:
            raise ValueError("API key required. Set GOOGLE_API_KEY env var or pass api_key.")
        
        genai.configure(api_key=self.api_key)
        self.model_name = model_name
    
    def _generate(self, prompt: str, max_output_tokens: int) -> str:
        model = genai.GenerativeModel(
            model_name=self.model_name,
            generation_config={"temperature": 0.1, "max_output_tokens": max_output_tokens}
        )
        response = model.generate_content(prompt)
        return response.text.strip()
    
    def parse_rfp(self, rfp_text: str) -> RFPSummary:
        """
        Parse an RFP document into a structured summary.
        
        Args:
            rfp_text: Full RFP text
            
        Returns:
            RFPSummary with the raw text attached
            
        Raises:
            ExtractionError: If the reply holds no valid summary
        """
        content = self._generate(SUMMARY_PROMPT.format(rfp_text=rfp_text), max_output_tokens=1000)
        parsed = extract_json_object(content)
        
        try:
            return RFPSummary.from_dict(parsed, raw_text=rfp_text)
        except ValueError as e:
            raise ExtractionError(str(e)) from e
    
    def extract_product_specs(self, rfp_text: str, product_names: Sequence[str]) -> List[ProductSpec]:
        """
        Extract technical specifications for each product.
        
        A product whose extraction fails gets an empty specification list
        so that downstream matching still sees it (and scores it 0%).
        
        Args:
            rfp_text: Full RFP text
            product_names: Products listed in the RFP summary
            
        Returns:
            One ProductSpec per product name, in the same order
        """
        product_specs = []
        
        for product_name in product_names:
            prompt = SPEC_PROMPT.format(product_name=product_name, rfp_text=rfp_text)
            try:
                content = self._generate(prompt, max_output_tokens=2000)
                parsed = extract_json_object(content)
                parsed.setdefault("productName", product_name)
                product_specs.append(ProductSpec.from_dict(parsed))
            except Exception as e:
                logger.error("Error extracting specs for %s: %s", product_name, e)
                product_specs.append(ProductSpec(product_name=product_name, specifications=()))
        
        return product_specs
    
    def qualify_rfp(self, rfp_text: str) -> Dict[str, Any]:
        """
        Complete RFP qualification workflow.
        
        Returns:
            Dict with 'summary' (RFPSummary) and 'product_specs' (list of ProductSpec)
        """
        summary = self.parse_rfp(rfp_text)
        product_specs = self.extract_product_specs(rfp_text, summary.products)
        
        return {
            "summary": summary,
            "product_specs": product_specs,
        }
