"""Agent core - system instruction and prompt templates"""

from typing import Optional

from pydantic import BaseModel

from spotcheck.models.submission import InputMode, SubmissionState

# ========== PROMPT TEMPLATES ==========

COORDINATES_PREFIX = "COORDINATES:"

SYSTEM_INSTRUCTION = """
You are 'SpotCheck', an expert AI assistant for snowboarding and skateboarding culture and location scouting.
Your primary goal is to identify the real-world location (the "spot") shown in user-provided media with high precision.

PROTOCOL:
1. **Analyze Visuals/Context**: Look for street signs, business names, unique architecture, mountain skylines, or park layouts.
2. **Determine Location**:
   - **Target**: Exact address (e.g., "123 Skate St, Los Angeles, CA").
   - **Fallback 1**: Specific intersection or block (e.g., "Intersection of Wilshire and Western, LA" or "Between 4th and 5th Ave").
   - **Fallback 2**: Neighborhood/District (e.g., "Koreatown, Los Angeles").
   - **Fallback 3**: City/Region (e.g., "Los Angeles, CA").
3. **Verify**: ALWAYS use Google Maps and Google Search to confirm the spot exists and looks correct.

OUTPUT FORMAT (Markdown):
*   **Spot Name**: [Name of spot or "Unknown Street Spot"]
*   **Location**: [The most specific address, intersection, or neighborhood you can identify]
*   **City/Region**: [City, State, Country]
*   **Context**: [Famous tricks, history, or description of obstacles]
*   **Confidence**: [Exact Match / Approximate Area / General Region]

If you are guessing the area based on architecture (e.g., "Barcelona ledges"), state that clearly.

CRITICAL: At the very end of your response, if you have identified a specific location (Address or Intersection), strictly output the coordinates in this exact format on a new line:
COORDINATES: Latitude,Longitude
(Example: COORDINATES: 34.052235,-118.243683)
"""

UPLOAD_PROMPT_TEMPLATE = (
    "Analyze {subject}. Cross-reference all images/videos provided to identify the exact "
    "skateboarding or snowboarding location depicted. Look for street signs, landmarks, "
    "shop names, or the park layout. Give the most specific location you can identify: "
    "an exact address first, otherwise an intersection, then a neighborhood, then a region."
)

SOURCE_LINK_CLAUSE = (
    "\n\nCONTEXT FROM USER: The user found this media at the following link: {source_link}. "
    "Use this link to identify the riders, crew, or video title to help narrow down the location."
)

VIDEO_LINK_PROMPT_TEMPLATE = (
    "I found a skateboarding or snowboarding video at this URL: {video_url}."
)

CLIP_WINDOW_CLAUSE = " The spot appears in the part of the video {window}."

VIDEO_LINK_INSTRUCTIONS = (
    "\n\nCan you tell me where this was filmed? Use Google Search to find information about "
    "this specific video or the spot described in its title/description, and verify the spot "
    "with Google Maps. Return the most specific location available (address, intersection, "
    "neighborhood, or region) and coordinates if possible."
)


class BuiltPrompt(BaseModel):
    """User prompt plus the fixed system instruction sent with it"""

    text: str
    system_instruction: str = SYSTEM_INSTRUCTION


def build_upload_prompt(media_count: int, source_link: Optional[str] = None) -> str:
    """Build upload-mode prompt.

    Args:
        media_count: Number of attached images/videos
        source_link: Optional page where the user found the media
    """
    subject = "this visual content" if media_count <= 1 else f"these {media_count} images/videos"
    prompt = UPLOAD_PROMPT_TEMPLATE.format(subject=subject)
    if source_link:
        prompt += SOURCE_LINK_CLAUSE.format(source_link=source_link)
    return prompt


def describe_clip_window(
    start_time: Optional[str] = None, duration_seconds: Optional[str] = None
) -> Optional[str]:
    """Describe the clip's temporal window, None when no hints were given"""
    if start_time and duration_seconds:
        return f"starting at {start_time} and lasting about {duration_seconds} seconds"
    if start_time:
        return f"starting at {start_time}"
    if duration_seconds:
        return f"lasting about {duration_seconds} seconds"
    return None


def build_video_link_prompt(
    video_url: str,
    start_time: Optional[str] = None,
    duration_seconds: Optional[str] = None,
) -> str:
    """Build video-link-mode prompt. The URL is embedded verbatim."""
    prompt = VIDEO_LINK_PROMPT_TEMPLATE.format(video_url=video_url)
    window = describe_clip_window(start_time, duration_seconds)
    if window:
        prompt += CLIP_WINDOW_CLAUSE.format(window=window)
    return prompt + VIDEO_LINK_INSTRUCTIONS


def build_prompt(state: SubmissionState) -> BuiltPrompt:
    """Build the prompt for the current submission"""
    if state.mode == InputMode.VIDEO_LINK:
        text = build_video_link_prompt(
            state.video_url or "",
            start_time=state.start_time,
            duration_seconds=state.duration_seconds,
        )
    else:
        text = build_upload_prompt(len(state.media), source_link=state.source_link)
    return BuiltPrompt(text=text)
