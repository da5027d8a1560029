# config package — authoritative source for chat-completion helper configuration.
#
# Sub-modules:
#   api_config.py    — endpoint, environment variable names, default model
#   model_params.py  — generation defaults, retry/backoff, batch pacing, timeout
#
# Prompt templates live with the tasks that use them in src/llm_tasks/config.py.
