from kindred_paths.parsers.token_extractor import COPY_TOKEN, extract_tokens_from_ability

__all__ = ["COPY_TOKEN", "extract_tokens_from_ability"]
