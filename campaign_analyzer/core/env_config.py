"""
Environment variables configuration template.
Copy this file to .env and replace the values with your actual credentials.
"""
from pathlib import Path

ENV_TEMPLATE = """
# OpenAI Configuration
OPENAI_API_KEY=your_openai_api_key
# OPENAI_BASE_URL=https://api.openai.com/v1
OPENAI_MODEL=gpt-4o
OPENAI_MAX_TOKENS=1000

# Analysis
MOCK_ANALYSIS=false

# Application
APP_TITLE=Email Campaign Analyzer
LOG_LEVEL=INFO
"""

def create_env_file(path='.env', overwrite=False):
    """Create a new .env file with template values."""
    env_path = Path(path)
    if env_path.exists() and not overwrite:
        print(f'.env file already exists at {env_path}, skipping')
        return env_path
    with open(env_path, 'w') as f:
        f.write(ENV_TEMPLATE.strip() + '\n')
    print(f'.env file created successfully at {env_path}!')
    return env_path

if __name__ == '__main__':
    create_env_file()
