from .bedrock import build_dictionary_prompt, invoke_dictionary_model, extract_response_text, call_bedrock, load_prompt_template

__all__ = ['build_dictionary_prompt', 'invoke_dictionary_model', 'extract_response_text', 'call_bedrock', 'load_prompt_template']
