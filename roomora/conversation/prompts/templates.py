"""
Typed prompt templates for the copy service.

The copy service rewrites a reply the engine has already decided on. The
prompt hands it the hotel database for grounding and the draft reply whose
facts must survive the rewrite.
"""

from typing import List, Optional

from pydantic import BaseModel, Field


COPY_SYSTEM_PROMPT_TEMPLATE = """You are Roomora's AI assistant for hotel bookings in Nepal.
Rewrite the DRAFT REPLY for the traveler in a warm, professional tone.

HOTEL DATABASE:
{hotel_database}

RULES:
1. Keep it SHORT: two sentences at most.
2. Keep every fact in the draft. Hotel names, counts and prices must not change.
3. Never mention hotels that are not in the database.
4. End with 2-4 short follow-up chips in this exact format:
   [SUGGESTIONS: First, Second, Third]
"""

COPY_USER_PROMPT_TEMPLATE = """Traveler{name_part} said: {user_text}

DRAFT REPLY:
{draft}"""


class CopyPromptConfig(BaseModel):
    """Inputs for one copy-service request."""

    hotel_lines: List[str] = Field(description="One formatted line per hotel")
    user_text: str = Field(default="", description="What the traveler typed")
    user_name: Optional[str] = Field(default=None)
    draft: str = Field(description="Locally generated reply text")

    def format_system_prompt(self) -> str:
        database = "\n".join(self.hotel_lines) if self.hotel_lines else "(empty)"
        return COPY_SYSTEM_PROMPT_TEMPLATE.format(hotel_database=database)

    def format_user_prompt(self) -> str:
        return COPY_USER_PROMPT_TEMPLATE.format(
            name_part=f" ({self.user_name})" if self.user_name else "",
            user_text=self.user_text or "(shared a location update)",
            draft=self.draft,
        )
