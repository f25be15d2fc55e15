"""
streamlit_app.py

Main Streamlit application file for navigation.
Located in the streamlit folder.
"""
import streamlit as st

st.set_page_config(
    page_title="引用グラフ PageRank",
    page_icon="🕸️",
    layout="wide",
    initial_sidebar_state="expanded"
)

st.sidebar.success("上のメニューからページを選択してください。")

st.title("引用グラフ PageRank プラットフォーム")
st.write("""
ようこそ！このプラットフォームでは、以下の機能を利用できます。

- **PageRank ランキング**: エッジリスト形式の引用グラフをアップロードするか、ランダムなグラフを生成し、
  PageRank スコア・パープレキシティの推移・上位ページを確認できます。

サイドバーのナビゲーションから各ページにアクセスしてください。
""")
st.markdown("---")
st.caption("入力形式: 1行に `<被引用ページID> <引用元ページID> ...` を空白区切りで記述します。")
