"""
Typed prompt template for the route planner.

The prompt is structured as a Pydantic model so the fixed planning
parameters are validated and can be tuned without editing the template.
Defaults reproduce the production prompt exactly.
"""

from pydantic import BaseModel, Field


class RoutePromptConfig(BaseModel):
    """
    Fixed planning parameters injected into the route prompt.

    These are properties of the campaign, not of a single request.
    """

    city: str = Field(default="長野県上田市", description="Target city, with prefecture")
    example_stores: str = Field(
        default="アリオ上田、イオン上田店",
        description="Example large supermarkets for the fallback policy",
    )
    travel_minutes: int = Field(
        default=15, ge=1, description="Average travel time between districts by car"
    )
    speech_minutes: int = Field(default=20, ge=1, description="Duration of one speech")
    lunch_minutes: int = Field(default=45, ge=1, description="Lunch break length")
    lunch_window_start_hour: int = Field(default=12, ge=0, le=23)
    lunch_window_end_hour: int = Field(default=13, ge=0, le=23)

    def format_prompt(
        self,
        template: str,
        districts: str,
        total_speeches: str,
        start_time: str,
        end_time: str,
    ) -> str:
        """
        Format the template with this config and the request values.

        Args:
            template: The ROUTE_PROMPT_TEMPLATE string
            districts: Districts already joined for display
            total_speeches: Requested number of speeches
            start_time: Start of the activity window (HH:MM)
            end_time: End of the activity window (HH:MM)

        Returns:
            Formatted prompt string with all placeholders filled
        """
        return template.format(
            city=self.city,
            example_stores=self.example_stores,
            travel_minutes=self.travel_minutes,
            speech_minutes=self.speech_minutes,
            lunch_minutes=self.lunch_minutes,
            lunch_window_start_hour=self.lunch_window_start_hour,
            lunch_window_end_hour=self.lunch_window_end_hour,
            districts=districts,
            total_speeches=total_speeches,
            start_time=start_time,
            end_time=end_time,
        )


DISTRICT_SEPARATOR = "、"


# =============================================================================
# Route Prompt Template
# =============================================================================

ROUTE_PROMPT_TEMPLATE = """あなたは日本の選挙キャンペーンの優秀なルートプランナーです。{city}での街頭演説のスケジュールを作成してください。

# 制約条件
- 訪問地区: {districts}
- 総演説回数: {total_speeches}回程度
- 活動時間: {start_time} から {end_time} まで

# 指示
1.  Google検索を使い、指定された各地区で過去に街頭演説が行われた場所を調べてください。実績のある場所を最優先でスケジュールに組み込んでください。
2.  もし過去の実績地が見つからない場合は、地区の市役所、主要駅、大型スーパーマーケット（例：{example_stores}）、交通量の多い交差点などを演説場所として提案してください。
3.  移動時間（地区間の移動は車で平均{travel_minutes}分と仮定）、演説時間（1回あたり{speech_minutes}分）、そして昼食休憩（{lunch_window_start_hour}時から{lunch_window_end_hour}時の間に{lunch_minutes}分間）を考慮した、現実的なタイムスケジュールを作成してください。
4.  出力は、必ず以下のJSON配列形式で、スケジュール全体を単一のJSONオブジェクトとして返してください。JSON以外の説明文や前置きは一切含めないでください。

# JSON出力フォーマット
[
{{"action": "演説", "location": "具体的な場所の名前", "startTime": "HH:MM", "endTime": "HH:MM"}},
{{"action": "移動", "location": "次の場所へ移動", "startTime": "HH:MM", "endTime": "HH:MM"}},
{{"action": "食事", "location": "昼食休憩", "startTime": "HH:MM", "endTime": "HH:MM"}}
]"""
