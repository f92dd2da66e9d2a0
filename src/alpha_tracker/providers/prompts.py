"""Prompt templates for the research gateway."""

from alpha_tracker.domain.models import Language

SYSTEM_PROMPT = (
    "You are an equity research assistant for a private investor. "
    "Use web search for current facts. Answer with a single JSON object and nothing else."
)

COACH_PROMPT = (
    "You are a trading psychology coach. Be direct and practical. "
    "Answer with a single JSON object and nothing else."
)


def language_instruction(language: Language) -> str:
    if language == Language.EN:
        return "Write every text field in English."
    return "Write every text field in Simplified Chinese."


def stock_prompt(name: str, language: Language) -> str:
    return f"""Research the listed company "{name}".
Find its latest share price, daily change, recent news, main business, progress of new
businesses, industry outlook, management commentary, latest financial report highlights,
five-year gross margin, market share and free cash flow trends, its core competitive barrier,
domestic vs overseas revenue split, and headline financials in billions.

Return JSON with exactly these keys:
{{
  "market": "CN" | "US" | "HK",
  "price": number,
  "changePercent": number,
  "companyNews": string,
  "mainBusiness": string,
  "newBusinessProgress": string,
  "industry": {{"name": string, "sentimentScore": number 0-10}},
  "managementVoice": string,
  "latestReport": string,
  "grossMarginTrend": [{{"year": string, "value": number}}],
  "marketShareTrend": [{{"year": string, "value": number}}],
  "coreBarrier": string,
  "businessRatio": {{"domestic": number, "overseas": number}},
  "freeCashFlowTrend": [{{"year": string, "value": number}}],
  "financials": {{"netAssets": number, "lastYearNetProfit": number, "marketCap": number,
                 "currency": string, "fiscalYear": string}}
}}
{language_instruction(language)}"""


def topic_prompt(keyword: str, language: Language) -> str:
    return f"""Research the investment theme "{keyword}" as of today.
Summarise the latest developments, rate market sentiment from 0 (very negative) to 10
(very positive), name the next catalyst, and list related listed companies.

Return JSON:
{{"summary": string, "sentimentScore": number, "catalyst": string, "relatedStocks": [string]}}
{language_instruction(language)}"""


def reflection_prompt(entry: str, language: Language) -> str:
    return f"""A trader wrote this journal entry:
\"\"\"{entry}\"\"\"
Identify the root cause of the mistake or behaviour and one concrete way to prevent it.

Return JSON:
{{"rootCause": string, "prevention": string}}
{language_instruction(language)}"""


def summary_prompt(entries: list[str], language: Language) -> str:
    joined = "\n".join(f"- {entry}" for entry in entries)
    return f"""These are a trader's journal entries:
{joined}
Find the recurring behavioural patterns and give an overall assessment.

Return JSON:
{{"content": string, "keyPoints": [string]}}
{language_instruction(language)}"""


def market_indices_prompt(language: Language) -> str:
    return f"""Report today's level and change of the Shanghai Composite, Shenzhen Component,
ChiNext, Hang Seng, Nasdaq and S&P 500 indices, and rate overall A-share market sentiment
from 0 (panic) to 10 (euphoria).

Return JSON:
{{"sentimentScore": number,
  "indices": [{{"name": string, "value": number, "change": number, "changePercent": number}}]}}
{language_instruction(language)}"""


def market_opportunities_prompt(language: Language) -> str:
    return f"""List the three to five most active themes or trading strategies in today's
A-share market, each with a few representative stocks.

Return JSON:
{{"marketOpportunities": [{{"type": "Sector" | "Concept" | "Strategy" | "Other",
  "title": string, "description": string,
  "stocks": [{{"name": string, "code": string, "reason": string}}]}}]}}
{language_instruction(language)}"""


def limit_up_prompt(language: Language) -> str:
    return f"""List up to ten representative A-share stocks that hit limit-up today.

Return JSON:
{{"limitUpStocks": [{{"name": string, "code": string, "time": string, "reason": string,
  "uniqueAdvantage": string, "hotspotDuration": string, "logicType": string}}]}}
{language_instruction(language)}"""


def market_capital_prompt(language: Language) -> str:
    return f"""Summarise today's A-share capital flows: the five-day northbound net inflow,
the margin financing balance, turnover and new account growth, plus the last five trading
days of turnover, margin balance, northbound and ETF net inflows. Amounts in 100 million CNY.

Return JSON:
{{"capitalData": {{"latest": {{"northbound5DayNetInflow": number, "marginBalance": number,
  "volume": number, "accountGrowth": number}},
  "trend": [{{"date": "MM-DD", "volume": number, "marginBalance": number,
  "northbound": number, "etfInflow": number}}],
  "summary": string}}}}
{language_instruction(language)}"""
