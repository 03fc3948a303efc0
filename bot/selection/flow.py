"""
Selection Flow

사용자에게 카테고리 → 아이템 순서로 선택지를 보여주고
하나의 아이템으로 좁혀 나간다.

흐름:
1. 카테고리 선택 메뉴 (개인 메시지)
2. 카테고리 아이템을 메뉴/페이지로 나눈 선택 화면
   - "< Page" / "Page >" 버튼으로 순환 이동
3. 아이템 선택 시 프롬프트 삭제 후 아이템 반환

시간 초과, 잘못된 응답은 모두 안내 메시지를 보낸 뒤 None 반환 (호출자는 중단으로 취급).
"""

import logging

from adapters.interfaces import IPromptChannel, IPromptHandle
from adapters.models import (
    Button,
    ButtonPressed,
    ButtonRow,
    ControlRow,
    ProtocolViolation,
    SelectMenu,
    SelectOption,
    expect_selection,
)
from bot.selection.pagination import Page, PageCursor, paginate
from core.constants import ControlIds, Defaults
from core.domain.state_machines import SelectionState, SelectionStateMachine
from core.storage.catalog import Catalog
from core.types import Category

logger = logging.getLogger(__name__)


TIMED_OUT_MESSAGE = "Timed out"
EMPTY_CATEGORY_MESSAGE = "No cosmetics in that category"
ABORTED_MESSAGE = "Something went wrong, please try again"

_NAVIGATION = ButtonRow(
    buttons=(
        Button(control_id=ControlIds.PAGE_BACK, label="< Page"),
        Button(control_id=ControlIds.PAGE_NEXT, label="Page >"),
    )
)


def build_category_menu(categories: tuple[Category, ...]) -> SelectMenu:
    """카테고리 선택 메뉴 (표시 이름 / 키)"""
    return SelectMenu(
        control_id=ControlIds.CATEGORY_MENU,
        options=tuple(SelectOption(label=c.name, value=c.key) for c in categories),
    )


def build_page_controls(page: Page) -> list[ControlRow]:
    """페이지 1개의 컨트롤: 메뉴 N개 + 이동 버튼 한 줄

    각 메뉴의 placeholder는 첫 번째 아이템.
    """
    controls: list[ControlRow] = [
        SelectMenu(
            control_id=str(i),
            options=tuple(SelectOption(label=item, value=item) for item in group),
            placeholder=group[0],
        )
        for i, group in enumerate(page)
    ]
    controls.append(_NAVIGATION)
    return controls


def page_content(index: int) -> str:
    return f"Select cosmetic\nPage **{index + 1}**"


class SelectionFlow:
    """카테고리 → 아이템 선택기

    Args:
        catalog: 카탈로그
        prompt_timeout: 응답 대기 시간 (초)
        options_per_menu: 메뉴당 최대 옵션 수
        menus_per_page: 페이지당 최대 메뉴 수

    사용 예시:
    ```python
    flow = SelectionFlow(catalog, prompt_timeout=60.0)

    item = await flow.select(channel, user_id="1234")
    if item is None:
        return  # 중단
    ```
    """

    def __init__(
        self,
        catalog: Catalog,
        prompt_timeout: float = Defaults.PROMPT_TIMEOUT_SEC,
        options_per_menu: int = Defaults.OPTIONS_PER_MENU,
        menus_per_page: int = Defaults.MENUS_PER_PAGE,
    ):
        self.catalog = catalog
        self.prompt_timeout = prompt_timeout
        self.options_per_menu = options_per_menu
        self.menus_per_page = menus_per_page

    async def select(self, channel: IPromptChannel, user_id: str) -> str | None:
        """아이템 하나 선택

        Args:
            channel: 명령이 호출된 채널
            user_id: 선택하는 사용자

        Returns:
            선택된 아이템, 중단 시 None
        """
        machine = SelectionStateMachine()

        try:
            category = await self._choose_category(channel, user_id, machine)
            if category is None:
                return None

            item = await self._choose_item(channel, user_id, category, machine)
            return item

        except ProtocolViolation as e:
            logger.warning(
                f"Selection aborted: {e}",
                extra={"user_id": user_id, "state": machine.state},
            )
            if not machine.is_terminal:
                machine.transition(SelectionState.CANCELLED)
            await channel.send(ABORTED_MESSAGE, private=True)
            return None

    async def _choose_category(
        self,
        channel: IPromptChannel,
        user_id: str,
        machine: SelectionStateMachine,
    ) -> Category | None:
        prompt = await channel.send(
            "Select category",
            controls=[build_category_menu(self.catalog.categories)],
            private=True,
        )

        event = await prompt.await_response(self.prompt_timeout)
        if event is None:
            await self._time_out(channel, prompt, machine)
            return None

        try:
            key = expect_selection(event)
            category = self.catalog.get_category(key)
            if category is None:
                raise ProtocolViolation(
                    f'malformed component response, invalid cosmetic category id "{key}"'
                )
        finally:
            await prompt.delete()

        machine.transition(SelectionState.CHOOSING_ITEM)
        return category

    async def _choose_item(
        self,
        channel: IPromptChannel,
        user_id: str,
        category: Category,
        machine: SelectionStateMachine,
    ) -> str | None:
        items = self.catalog.items_in_category(category)
        if not items:
            machine.transition(SelectionState.CANCELLED)
            await channel.send(EMPTY_CATEGORY_MESSAGE, private=True)
            logger.info(
                f"Empty category: {category.name}",
                extra={"user_id": user_id},
            )
            return None

        pages = paginate(items, self.options_per_menu, self.menus_per_page)
        cursor = PageCursor(len(pages))

        prompt = await channel.send(
            page_content(cursor.index),
            controls=build_page_controls(pages[cursor.index]),
            private=True,
        )

        try:
            while True:
                event = await prompt.await_response(self.prompt_timeout)
                if event is None:
                    await self._time_out(channel, prompt, machine)
                    return None

                if isinstance(event, ButtonPressed):
                    await self._navigate(prompt, event, cursor, pages)
                    continue

                item = expect_selection(event)
                if not self.catalog.contains(category, item):
                    raise ProtocolViolation(
                        f'malformed component response, "{item}" is not a {category.name} cosmetic'
                    )

                await prompt.delete()
                machine.transition(SelectionState.RESOLVED)
                return item

        except ProtocolViolation:
            await prompt.delete()
            raise

    async def _navigate(
        self,
        prompt: IPromptHandle,
        event: ButtonPressed,
        cursor: PageCursor,
        pages: list[Page],
    ) -> None:
        if event.control_id == ControlIds.PAGE_NEXT:
            index = cursor.next()
        elif event.control_id == ControlIds.PAGE_BACK:
            index = cursor.previous()
        else:
            raise ProtocolViolation(
                f'malformed component response. invalid button id "{event.control_id}"'
            )

        await prompt.edit(page_content(index), controls=build_page_controls(pages[index]))

    async def _time_out(
        self,
        channel: IPromptChannel,
        prompt: IPromptHandle,
        machine: SelectionStateMachine,
    ) -> None:
        machine.transition(SelectionState.TIMED_OUT)
        await prompt.delete()
        await channel.send(TIMED_OUT_MESSAGE, private=True)
