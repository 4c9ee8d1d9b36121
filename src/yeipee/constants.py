from __future__ import annotations

"""Markers and names shared between template authors and the processor.

The tokens below are a small wire format: templates produced by the YEAST
tool-chain rely on them byte for byte, so they must not be normalized
(no case folding, no whitespace tolerance beyond what the patterns allow).
"""

import re

# Opening / closing script tags (case-sensitive, plain substring search).
SCRIPT_OPEN: str = '<script'
SCRIPT_CLOSE: str = '</script>'

# Attribute values identifying the model carrier and the declare scripts.
MODEL_ATTR: str = 'model'
DECLARE_ATTR: str = 'declare'

MODEL_FRAGMENT_RE = re.compile(
    r'<script\s.*yst\s*=\s*["\']' + MODEL_ATTR + r'["\']>.*</script>', re.DOTALL
)
DECLARE_FRAGMENT_RE = re.compile(
    r'<script\s.*yst\s*=\s*["\']' + DECLARE_ATTR + r'["\']>.*</script>', re.DOTALL
)

# CDATA guards emitted around script bodies. The start token is matched
# without its trailing '[', which is skipped together with it.
CDATA_START: str = '//<![CDATA'
CDATA_START_SKIP: int = len('//<![CDATA[')
CDATA_END: str = '//]]>'

# Call site of a macro-output expression; execution starts right after
# the `document.write` part, at the parenthesized YST.Txt expression.
YST_CALL_SITE: str = 'document.write(YST.Txt'
YST_CALL_SKIP: int = len('document.write')

# Guard emitted by the client-side engine bootstrap: nothing to run here.
YST_ABSENT_GUARD: str = "if (typeof YST != 'undefined')"

# Model carrier written in place of the template's own model section.
MODEL_CARRIER_OPEN: str = '<script yst="model">'
MODEL_CARRIER_CLOSE: str = '</script>'

# Binding that receives the value of a macro-output expression.
RESULT_BINDING: str = 'res'

# Inline diagnostics written when a fragment cannot be evaluated.
MODEL_ERROR_MARK: str = '--ERROR EVALUATING NEW MODEL SECTION--'
CONTENT_ERROR_MARK: str = '--ERROR GETTING CONTENT--'

# Source names reported to the evaluator.
MODEL_SOURCE_NAME: str = 'modelSection'
COMMAND_SOURCE_PREFIX: str = 'command_'

# Logical names of the two library scripts and their packaged file names.
SHARED_ENV_LIBRARY: str = 'sharedEnv'
YST_ENGINE_LIBRARY: str = 'ystEngine'
LIBRARY_FILES = {
    SHARED_ENV_LIBRARY: 'shared_env.js',
    YST_ENGINE_LIBRARY: 'ysttxt.js',
}

# Request parameter / cookie carrying the client processing preference.
STATUS_PARAM: str = 'yst.yeipee'
