"""Unit tests for embeddings, image and video domain models."""

from zai_client.domain.common import TaskStatus
from zai_client.domain.embeddings import EmbeddingsRequest, EmbeddingsResponse
from zai_client.domain.images import (
    AsyncImageGenerationRequest,
    AsyncImagesResponse,
    ImageGenerationRequest,
)
from zai_client.domain.videos import VideoGenerationRequest, VideoObject


class TestEmbeddingsModels:
    def test_single_input(self):
        request = EmbeddingsRequest.single("embedding-3", "hello")

        assert request.model_dump(mode="json", exclude_none=True) == {
            "input": "hello",
            "model": "embedding-3",
        }

    def test_batch_input(self):
        request = EmbeddingsRequest.batch("embedding-3", ["a", "b"])

        assert request.input == ["a", "b"]

    def test_token_array_input(self):
        request = EmbeddingsRequest(model="embedding-3", input=[[1, 2], [3]])

        assert request.input == [[1, 2], [3]]

    def test_decode_response(self):
        response = EmbeddingsResponse.model_validate_json(
            '{"object":"list","model":"embedding-3",'
            '"data":[{"object":"embedding","index":0,"embedding":[0.1,0.2]}],'
            '"usage":{"prompt_tokens":2,"total_tokens":2}}'
        )

        assert response.data[0].embedding == [0.1, 0.2]
        assert response.usage.completion_tokens == 0


class TestImageModels:
    def test_simple_requests(self):
        assert ImageGenerationRequest.simple("a cat", "cogview-4").model_dump(
            exclude_none=True
        ) == {"prompt": "a cat", "model": "cogview-4"}
        assert AsyncImageGenerationRequest.simple("a dog", "glm-image").model == "glm-image"

    def test_async_result_before_completion(self):
        result = AsyncImagesResponse.model_validate(
            {"id": "task-1", "task_status": TaskStatus.PROCESSING}
        )

        assert result.task_status == "PROCESSING"
        assert result.image_result is None


class TestVideoModels:
    def test_text_to_video(self):
        request = VideoGenerationRequest.text_to_video("cogvideox-3", "a sunset")

        assert request.model_dump(exclude_none=True) == {
            "model": "cogvideox-3",
            "prompt": "a sunset",
        }

    def test_image_to_video_accepts_frame_list(self):
        request = VideoGenerationRequest(model="cogvideox-3", image_url=["first.png", "last.png"])

        assert request.image_url == ["first.png", "last.png"]

    def test_decode_finished_task(self):
        video = VideoObject.model_validate(
            {
                "id": "v1",
                "task_status": TaskStatus.SUCCESS,
                "video_result": [{"url": "https://x/v.mp4", "cover_image_url": "https://x/c.png"}],
            }
        )

        assert video.video_result[0].url == "https://x/v.mp4"
