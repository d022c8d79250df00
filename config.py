import os

from dotenv import load_dotenv

# .env 의 POSECOACH_* 값을 환경변수로 로드
load_dotenv()

# ===== 로깅 =====
LOG_LEVEL = os.environ.get("POSECOACH_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

# ===== 판정 스무딩 =====
SMOOTHING_WINDOW = 0       # 배치 평가 기본 다수결 창 (프레임), 0이면 스무딩 끔
MAX_SMOOTHING_WINDOW = 30

# ===== 표시 문구 =====
CORRECT_FORM_TEXT = "Great posture!"
NO_EXERCISE_TEXT = "Select an exercise to start."

# ===== API =====
API_TITLE = "PoseCoach Form API"
API_VERSION = "0.1.0"
CORS_ALLOW_ORIGINS = ["*"]
MAX_BATCH_FRAMES = 1000
