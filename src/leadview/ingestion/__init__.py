from .lead_loader import load_leads, load_leads_from_csv, load_leads_from_json, parse_leads

__all__ = [
    "load_leads",
    "load_leads_from_csv",
    "load_leads_from_json",
    "parse_leads",
]
