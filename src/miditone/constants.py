SR = 48000
CHANNELS = 1

# segmentos de esta duración (ms) o menos no se mandan a ningún sink
MIN_SEGMENT_MS = 1.0
