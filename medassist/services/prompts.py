# Fixed prompt pairs and function-call tool schemas for the AI gateway.
# Each tool is forced via tool_choice so the reply is always a function call.

DIAGNOSIS_SYSTEM_PROMPT = """You are an AI medical assistant helping doctors analyze patient symptoms and suggest possible diagnoses.

IMPORTANT GUIDELINES:
- Provide differential diagnoses based on the symptoms
- Assign a confidence level (low, medium, high, very_high)
- Explain your reasoning clearly
- Consider the severity and duration
- Include relevant red flags or urgent considerations
- Always remind that this is AI-assisted analysis and requires doctor's clinical judgment

Format your response as structured data that will be used in a medical interface."""

DIAGNOSIS_USER_TEMPLATE = """Patient Symptoms Analysis Request:

Symptoms: {symptoms}
Severity: {severity}
Duration: {duration}
{history_line}

Please provide:
1. Primary diagnosis suggestion with confidence level
2. Differential diagnoses (2-3 alternatives)
3. Clinical reasoning
4. Any red flags or urgent considerations
5. Recommended diagnostic tests or examinations"""

TREATMENT_SYSTEM_PROMPT = """You are an AI medical assistant helping doctors create treatment plans based on diagnoses.

IMPORTANT GUIDELINES:
- Provide evidence-based treatment recommendations
- Consider patient allergies and current medications
- Suggest priority level (routine, urgent, emergency)
- Include medication names, dosages, and frequencies
- Provide precautions and contraindications
- Include follow-up recommendations
- Always emphasize that this requires doctor's review and approval

Format your response as structured treatment data."""

TREATMENT_USER_TEMPLATE = """Treatment Planning Request:

Diagnosis: {diagnosis}
{patient_info_line}
{allergies_line}
{medications_line}

Please provide:
1. Treatment plan overview
2. Specific medications with dosages
3. Priority level (routine, urgent, emergency)
4. Precautions and contraindications
5. Follow-up instructions
6. Lifestyle recommendations"""

SUMMARY_SYSTEM_PROMPT = """You are an AI medical assistant that summarizes medical records for doctors.

IMPORTANT GUIDELINES:
- Extract key clinical findings
- Highlight important diagnoses and treatments
- Identify critical lab results and vital signs
- Note allergies and medication history
- Summarize chronologically if applicable
- Flag any urgent or concerning information
- Keep summaries concise but comprehensive

Format your response as structured summary data."""

SUMMARY_USER_TEMPLATE = """Please summarize the following medical record:

{medical_record_text}

Provide:
1. A concise summary (2-3 paragraphs)
2. Key findings (bullet points)
3. Important diagnoses
4. Current medications
5. Allergies
6. Any urgent flags or concerns"""


def _string_list(description: str) -> dict:
    return {"type": "array", "items": {"type": "string"}, "description": description}


DIAGNOSIS_TOOL = {
    "type": "function",
    "function": {
        "name": "provide_diagnosis",
        "description": "Provide structured diagnosis analysis",
        "parameters": {
            "type": "object",
            "properties": {
                "primary_diagnosis": {"type": "string", "description": "The most likely diagnosis"},
                "confidence": {
                    "type": "string",
                    "enum": ["low", "medium", "high", "very_high"],
                    "description": "Confidence level in the diagnosis",
                },
                "reasoning": {"type": "string", "description": "Clinical reasoning for the diagnosis"},
                "differential_diagnoses": _string_list("Alternative possible diagnoses"),
                "red_flags": _string_list("Urgent considerations or warning signs"),
                "recommended_tests": _string_list("Recommended diagnostic tests"),
            },
            "required": ["primary_diagnosis", "confidence", "reasoning", "differential_diagnoses"],
            "additionalProperties": False,
        },
    },
}

TREATMENT_TOOL = {
    "type": "function",
    "function": {
        "name": "provide_treatment",
        "description": "Provide structured treatment plan",
        "parameters": {
            "type": "object",
            "properties": {
                "treatment_plan": {"type": "string", "description": "Overview of the treatment approach"},
                "medications": _string_list("List of medications with dosages"),
                "priority": {
                    "type": "string",
                    "enum": ["routine", "urgent", "emergency"],
                    "description": "Treatment priority level",
                },
                "precautions": {"type": "string", "description": "Important precautions and contraindications"},
                "follow_up": {"type": "string", "description": "Follow-up instructions and timeline"},
                "lifestyle_recommendations": _string_list("Lifestyle and self-care recommendations"),
            },
            "required": ["treatment_plan", "medications", "priority", "follow_up"],
            "additionalProperties": False,
        },
    },
}

SUMMARY_TOOL = {
    "type": "function",
    "function": {
        "name": "provide_summary",
        "description": "Provide structured medical record summary",
        "parameters": {
            "type": "object",
            "properties": {
                "summary": {"type": "string", "description": "Concise narrative summary of the medical record"},
                "key_findings": _string_list("Important clinical findings and observations"),
                "diagnoses": _string_list("Diagnoses mentioned in the record"),
                "medications": _string_list("Current medications"),
                "allergies": _string_list("Known allergies"),
                "urgent_flags": _string_list("Urgent concerns or red flags"),
            },
            "required": ["summary", "key_findings"],
            "additionalProperties": False,
        },
    },
}
