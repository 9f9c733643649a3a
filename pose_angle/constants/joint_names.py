# 관절 이름 (COCO-17 기준, MediaPipe/Vision 공통으로 매핑 가능한 것만)
NOSE = "nose"
L_EYE, R_EYE = "left_eye", "right_eye"
L_EAR, R_EAR = "left_ear", "right_ear"
L_SHOULDER, R_SHOULDER = "left_shoulder", "right_shoulder"
L_ELBOW,   R_ELBOW     = "left_elbow", "right_elbow"
L_WRIST,   R_WRIST     = "left_wrist", "right_wrist"
L_HIP,     R_HIP       = "left_hip", "right_hip"
L_KNEE,    R_KNEE      = "left_knee", "right_knee"
L_ANKLE,   R_ANKLE     = "left_ankle", "right_ankle"

JOINT_NAMES = (
    NOSE,
    L_EYE, R_EYE,
    L_EAR, R_EAR,
    L_SHOULDER, R_SHOULDER,
    L_ELBOW, R_ELBOW,
    L_WRIST, R_WRIST,
    L_HIP, R_HIP,
    L_KNEE, R_KNEE,
    L_ANKLE, R_ANKLE,
)

# Triplets for joint angles (first, vertex, last)
RIGHT_ARM = (R_SHOULDER, R_ELBOW, R_WRIST)
LEFT_ARM  = (L_SHOULDER, L_ELBOW, L_WRIST)

RIGHT_LEG = (R_HIP, R_KNEE, R_ANKLE)
LEFT_LEG  = (L_HIP, L_KNEE, L_ANKLE)

JOINT_TRIPLE_PRESETS = {
    "right_arm": RIGHT_ARM,
    "left_arm": LEFT_ARM,
    "right_leg": RIGHT_LEG,
    "left_leg": LEFT_LEG,
}
