"""Media transcoding using FFmpeg."""

from pathlib import Path
from typing import Optional

from clipbot_core.models.config import LoopConfig, VerticalConfig
from clipbot_core.processors.runner import ToolResult, ToolRunner
from clipbot_core.utils.video import VideoInfo, cover_geometry, parse_probe_output


class VideoRenderer:
    """
    Build and run FFmpeg invocations for each output kind.

    Every method writes to an explicit output path and returns the raw
    ToolResult; judging the result is left to the transcode stage.
    """

    def __init__(
        self,
        runner: Optional[ToolRunner] = None,
        ffmpeg: str = "ffmpeg",
        ffprobe: str = "ffprobe",
        vertical: Optional[VerticalConfig] = None,
        loop: Optional[LoopConfig] = None,
    ):
        self.runner = runner or ToolRunner()
        self.ffmpeg = ffmpeg
        self.ffprobe = ffprobe
        self.vertical = vertical or VerticalConfig()
        self.loop = loop or LoopConfig()

    # -- pass-through -------------------------------------------------------

    def remux(self, input_path: Path, output_path: Path, timeout: float) -> ToolResult:
        """Re-containerize to MP4 without touching the streams."""
        cmd = [
            self.ffmpeg,
            "-y",
            "-i", str(input_path),
            "-c", "copy",
            "-movflags", "+faststart",
            str(output_path),
        ]
        return self.runner.run(cmd, timeout=timeout)

    # -- vertical export ----------------------------------------------------

    def vertical_filter(self, source: Optional[VideoInfo] = None) -> str:
        """
        Build the scale-then-crop filter for the vertical canvas.

        With known source dimensions the scaled size and crop offsets are
        computed exactly; otherwise FFmpeg's cover-style scaling is used.
        """
        width, height = self.vertical.dimensions
        if source:
            scaled_w, scaled_h, x, y = cover_geometry(source.width, source.height, width, height)
            geometry = f"scale={scaled_w}:{scaled_h},crop={width}:{height}:{x}:{y}"
        else:
            geometry = (
                f"scale={width}:{height}:force_original_aspect_ratio=increase,"
                f"crop={width}:{height}:(iw-{width})/2:(ih-{height})/2"
            )
        return f"{geometry},setsar=1,fps={self.vertical.fps}"

    def render_vertical(
        self,
        input_path: Path,
        output_path: Path,
        timeout: float,
        source: Optional[VideoInfo] = None,
    ) -> ToolResult:
        """Encode a 9:16 export with progressive-playback metadata."""
        cmd = [
            self.ffmpeg,
            "-y",
            "-i", str(input_path),
            "-vf", self.vertical_filter(source),
            "-c:v", "libx264",
            "-preset", self.vertical.preset,
            "-crf", str(self.vertical.crf),
            "-pix_fmt", "yuv420p",
            "-c:a", self.vertical.audio_codec,
            "-b:a", self.vertical.audio_bitrate,
            "-movflags", "+faststart",
            str(output_path),
        ]
        return self.runner.run(cmd, timeout=timeout)

    # -- animated loop ------------------------------------------------------

    def loop_filter(self, fps: int, width: int) -> str:
        """fps + width scaling shared by both palette passes."""
        return f"fps={fps},scale={width}:-1:flags={self.loop.scale_flags}"

    def generate_palette(
        self,
        input_path: Path,
        palette_path: Path,
        fps: int,
        width: int,
        timeout: float,
    ) -> ToolResult:
        """Pass 1: compute a palette from the whole frame sequence."""
        cmd = [
            self.ffmpeg,
            "-y",
            "-i", str(input_path),
            "-vf", f"{self.loop_filter(fps, width)},palettegen",
            str(palette_path),
        ]
        return self.runner.run(cmd, timeout=timeout)

    def apply_palette(
        self,
        input_path: Path,
        palette_path: Path,
        output_path: Path,
        fps: int,
        width: int,
        timeout: float,
    ) -> ToolResult:
        """Pass 2: quantize every frame against the generated palette."""
        cmd = [
            self.ffmpeg,
            "-y",
            "-i", str(input_path),
            "-i", str(palette_path),
            "-filter_complex", f"{self.loop_filter(fps, width)}[x];[x][1:v]paletteuse",
            str(output_path),
        ]
        return self.runner.run(cmd, timeout=timeout)

    # -- still frame --------------------------------------------------------

    def extract_frame(
        self,
        input_path: Path,
        output_path: Path,
        timeout: float,
        width: Optional[int] = None,
        timestamp: float = 0.0,
    ) -> ToolResult:
        """Grab a single JPEG frame, optionally scaled to ``width``."""
        cmd = [
            self.ffmpeg,
            "-y",
            "-ss", f"{timestamp:g}",
            "-i", str(input_path),
            "-frames:v", "1",
            "-q:v", "2",
        ]
        if width:
            cmd.extend(["-vf", f"scale={width}:-1"])
        cmd.append(str(output_path))
        return self.runner.run(cmd, timeout=timeout)

    # -- inspection ---------------------------------------------------------

    def probe(self, path: Path, timeout: float = 30) -> Optional[VideoInfo]:
        """Read dimensions and duration of the first video stream."""
        cmd = [
            self.ffprobe,
            "-v", "error",
            "-select_streams", "v:0",
            "-show_entries", "stream=width,height,codec_name,r_frame_rate,duration",
            "-show_entries", "format=duration",
            "-of", "json",
            str(path),
        ]
        result = self.runner.run(cmd, timeout=timeout)
        if not result.ok:
            return None
        return parse_probe_output(result.stdout)

    def is_available(self) -> bool:
        """Check if FFmpeg is available."""
        return self.runner.is_available(self.ffmpeg)
