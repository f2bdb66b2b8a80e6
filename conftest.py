"""
pytest配置文件
Task ID: R3 - 反應式嵌入訊息測試

設置測試環境，確保項目根目錄（reaction_embeds、test_utils）可被匯入
"""
from __future__ import annotations

import sys
from pathlib import Path

# 獲取項目根目錄
project_root = Path(__file__).parent.absolute()

# 確保項目根目錄在Python路徑的最前面
project_root_str = str(project_root)
if project_root_str in sys.path:
    sys.path.remove(project_root_str)
sys.path.insert(0, project_root_str)
